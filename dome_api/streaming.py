"""
Dome API streaming client

Connects to wss://ws.domeapi.io/<API_KEY>, sends subscribe frames and hands
inbound events to registered handlers.

Usage:
    from dome_api import DomeWebSocket

    def subscribe(ws):
        ws.subscribe(platform="polymarket", type="orders", filters={"users": ["0x..."]})

    stream = DomeWebSocket(api_key="...")
    stream.on_event(lambda data: print(data["side"], data["market_slug"]))
    stream.on_ack(lambda sid: print("subscribed", sid))
    stream.run(on_open=subscribe, run_until=datetime.now() + timedelta(minutes=5))

Callbacks run on the socket's background thread, not the caller's.
There is no automatic reconnect: once the connection drops, run() returns.
"""
import json
import threading
import time
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Sequence, Union
from datetime import datetime

import websocket

from ._secure_key import SecureKey, secure_key_or_none
from .config import Config
from .errors import WebSocketConfigError
from .utils.logger import get_logger, log_stream_event
from .utils.timeutils import to_unix

logger = get_logger(__name__)

DEFAULT_USERS_PER_SUBSCRIPTION = 100

# run() returns at most twice this long after its deadline (close handshake, then thread join)
CLOSE_TIMEOUT = 0.5

EventHandler = Callable[[Any], None]
AckHandler = Callable[[Optional[str]], None]
OpenHandler = Callable[["DomeWebSocket"], None]


class ConnectionState(str, Enum):
    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    OPEN = "open"
    CLOSED = "closed"


class DomeWebSocket:
    """
    One persistent connection per API key.

    State moves DISCONNECTED -> CONNECTING -> OPEN -> CLOSED. Malformed
    frames, unknown frame types and socket errors are logged and dropped;
    they never stop the stream or reach the caller.
    """

    DEFAULT_VERSION = Config.WS_PROTOCOL_VERSION

    def __init__(
        self,
        api_key: Optional[str] = None,
        url: Optional[str] = None,
        poll_interval: Optional[float] = None,
    ):
        """
        Args:
            api_key: Dome API key (falls back to Config.DOME_API_KEY)
            url: Override for Config.WS_URL
            poll_interval: Seconds between deadline checks in run()
        """
        self._api_key: Optional[SecureKey] = secure_key_or_none(Config.get_api_key(api_key))
        self.url = (url or Config.WS_URL).rstrip("/")
        self.poll_interval = Config.WS_POLL_INTERVAL if poll_interval is None else poll_interval

        self._subscription_ids: List[Optional[str]] = []
        self._event_handler: Optional[EventHandler] = None
        self._ack_handler: Optional[AckHandler] = None
        self._open_handler: Optional[OpenHandler] = None

        self._ws: Optional[websocket.WebSocketApp] = None
        self._send_lock = threading.Lock()
        self._state = ConnectionState.DISCONNECTED

    @property
    def state(self) -> ConnectionState:
        return self._state

    @property
    def subscription_ids(self) -> List[Optional[str]]:
        """Acknowledged subscription ids in arrival order, duplicates included"""
        return list(self._subscription_ids)

    # ─────────────────────────────────────────────────────────────────────────
    # Handler registration
    # ─────────────────────────────────────────────────────────────────────────

    def on_event(self, handler: EventHandler) -> "DomeWebSocket":
        """Register the handler called with each event frame's 'data' payload"""
        self._event_handler = handler
        return self

    def on_ack(self, handler: AckHandler) -> "DomeWebSocket":
        """Register the handler called with each acknowledged subscription id"""
        self._ack_handler = handler
        return self

    # ─────────────────────────────────────────────────────────────────────────
    # Outbound
    # ─────────────────────────────────────────────────────────────────────────

    def subscribe(
        self,
        platform: str,
        type: str,
        filters: Dict[str, Any],
        version: int = DEFAULT_VERSION,
    ) -> bool:
        """
        Send a subscribe frame. Call from the on_open callback or later.

        Args:
            platform: e.g. "polymarket"
            type: e.g. "orders"
            filters: e.g. {"users": ["0x...", "0x..."]}
            version: protocol version (default 1)

        Returns:
            True if the frame was written, False if there is no open connection
        """
        payload = {
            "action": "subscribe",
            "platform": platform,
            "version": version,
            "type": type,
            "filters": filters,
        }
        return self._send_frame(json.dumps(payload))

    def subscribe_users(
        self,
        users: Sequence[str],
        platform: str = "polymarket",
        type: str = "orders",
        chunk_size: int = DEFAULT_USERS_PER_SUBSCRIPTION,
    ) -> int:
        """
        Subscribe to a wallet list, one frame per chunk of chunk_size users.

        Returns:
            Number of frames written
        """
        if chunk_size < 1:
            raise ValueError("chunk_size must be >= 1")

        sent = 0
        for start in range(0, len(users), chunk_size):
            chunk = list(users[start:start + chunk_size])
            if self.subscribe(platform=platform, type=type, filters={"users": chunk}):
                sent += 1
        return sent

    def _send_frame(self, payload: str) -> bool:
        with self._send_lock:
            if self._ws is None or self._state is not ConnectionState.OPEN:
                logger.warning("Cannot send frame: connection is not open")
                return False
            try:
                self._ws.send(payload)
            except websocket.WebSocketException as e:
                logger.warning(f"Failed to send frame: {e}")
                return False
        return True

    # ─────────────────────────────────────────────────────────────────────────
    # Run loop
    # ─────────────────────────────────────────────────────────────────────────

    def run(
        self,
        on_open: Optional[OpenHandler] = None,
        run_until: Optional[Union[datetime, float, int]] = None,
    ) -> None:
        """
        Connect and block until the connection closes or run_until passes.

        Register on_event/on_ack before calling. on_open is called with this
        client once the socket is open, so it can subscribe inline.

        Args:
            on_open: Callback receiving this client when the connection opens
            run_until: datetime or Unix timestamp to stop at (None = until disconnect)

        Raises:
            WebSocketConfigError: the API key is missing or blank (no connection attempted)
        """
        if not self._api_key:
            raise WebSocketConfigError("DOME_API_KEY is not set")

        deadline = None if run_until is None else to_unix(run_until)
        url = f"{self.url}/{self._api_key.get()}"

        self._open_handler = on_open
        self._state = ConnectionState.CONNECTING
        log_stream_event(logger, "connecting", self._api_key.mask_in(url))

        self._ws = websocket.WebSocketApp(
            url,
            on_open=self._handle_open,
            on_message=self._handle_message,
            on_error=self._handle_error,
            on_close=self._handle_close,
        )
        thread = threading.Thread(
            target=self._ws.run_forever,
            name="DomeWebSocketThread",
            daemon=True,
        )
        thread.start()

        try:
            while thread.is_alive():
                if deadline is None:
                    wait = self.poll_interval
                else:
                    remaining = deadline - time.time()
                    if remaining <= 0:
                        log_stream_event(logger, "deadline reached")
                        break
                    wait = min(self.poll_interval, remaining)
                thread.join(wait)
        finally:
            grace = min(self.poll_interval, CLOSE_TIMEOUT)
            self.close(timeout=grace)
            thread.join(grace)
            self._state = ConnectionState.CLOSED

    def close(self, timeout: float = CLOSE_TIMEOUT) -> None:
        """
        Close the connection if one exists; never raises.

        Args:
            timeout: Seconds to wait for the peer to answer the close frame
        """
        ws = self._ws
        if ws is None:
            return
        try:
            ws.close(timeout=timeout)
        except Exception as e:
            logger.debug(f"Ignoring error while closing websocket: {e}")

    # ─────────────────────────────────────────────────────────────────────────
    # Inbound
    # ─────────────────────────────────────────────────────────────────────────

    def handle_frame(self, raw: Union[str, bytes, None]) -> None:
        """
        Dispatch one inbound text frame.

        - {"type": "ack", "subscription_id": ...}: id appended to
          subscription_ids, then the ack handler is called with it
        - {"type": "event", "data": {...}}: event handler called with data;
          dropped when data is missing
        - blank frames, invalid JSON and any other type are ignored
        """
        if isinstance(raw, bytes):
            try:
                raw = raw.decode("utf-8")
            except UnicodeDecodeError:
                logger.debug("Ignoring non UTF-8 frame")
                return

        if raw is None or not raw.strip():
            return

        try:
            message = json.loads(raw)
        except ValueError:
            logger.debug(f"Ignoring malformed frame: {raw[:200]!r}")
            return

        if not isinstance(message, dict):
            return

        frame_type = message.get("type")
        if frame_type == "ack":
            subscription_id = message.get("subscription_id")
            if subscription_id:
                self._subscription_ids.append(subscription_id)
            if self._ack_handler:
                self._ack_handler(subscription_id)
        elif frame_type == "event":
            payload = message.get("data")
            if payload is None:
                return
            if self._event_handler:
                self._event_handler(payload)
        else:
            logger.debug(f"Ignoring frame with type {frame_type!r}")

    def _handle_open(self, ws) -> None:
        self._state = ConnectionState.OPEN
        log_stream_event(logger, "open")
        if self._open_handler:
            self._open_handler(self)

    def _handle_message(self, ws, message) -> None:
        self.handle_frame(message)

    def _handle_error(self, ws, error) -> None:
        logger.warning(f"Websocket error ignored: {error}")

    def _handle_close(self, ws, close_status_code=None, close_msg=None) -> None:
        self._state = ConnectionState.CLOSED
        log_stream_event(logger, "closed", f"code={close_status_code}" if close_status_code else None)
