from textual.message import Message


class CacheChanged(Message):
    """The news list or its loading state changed; the cards need redrawing."""
