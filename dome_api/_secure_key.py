"""
Secure API Key Wrapper

Keeps the Dome API key out of logs, reprs and tracebacks while still
letting the transport and streaming client read it.
"""
from typing import Optional

VISIBLE_CHARS = 4


class SecureKey:
    """
    Holds the Dome API key; str() and repr() only ever show a masked form.

    The streaming endpoint embeds the key in the connection URL, so every
    URL that gets logged goes through mask_in() first.

    Usage:
        key = SecureKey("dome_live_abcdef123456")

        print(key)  # Output: SecureKey(dome**************3456)
        headers = {"Authorization": f"Bearer {key.get()}"}
    """

    __slots__ = ('_key',)

    def __init__(self, key: Optional[str]):
        self._key = key

    def get(self) -> Optional[str]:
        """Unwrapped key value for building headers and URLs"""
        return self._key

    def __bool__(self) -> bool:
        return bool(self._key and self._key.strip())

    def masked(self) -> str:
        """
        First and last four characters with everything between starred out;
        keys too short to leave anything hidden are starred out entirely.
        """
        if not self._key:
            return "****"
        hidden = len(self._key) - 2 * VISIBLE_CHARS
        if hidden <= 0:
            return "*" * len(self._key)
        return self._key[:VISIBLE_CHARS] + "*" * hidden + self._key[-VISIBLE_CHARS:]

    def mask_in(self, text: str) -> str:
        """Replace every occurrence of the key inside text with its masked form"""
        if not self._key:
            return text
        return text.replace(self._key, self.masked())

    def __repr__(self) -> str:
        return f"SecureKey({self.masked()})"

    __str__ = __repr__


def secure_key_or_none(value: Optional[str]) -> Optional[SecureKey]:
    """SecureKey for a non-blank value, else None"""
    if value is None or not str(value).strip():
        return None
    return SecureKey(str(value))
