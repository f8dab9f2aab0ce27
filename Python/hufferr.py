# Bradford Arrington 2025


class HuffmanError(Exception):
    """Base class for every failure raised by the Huffman text coder."""


class EmptyInput(HuffmanError):
    """No characters to build a tree from."""


class UnknownSymbol(HuffmanError):
    """A character was encoded that has no codeword in the table."""

    def __init__(self, symbol: str, position: int):
        super().__init__(f"No codeword for character {symbol!r} at position {position}")
        self.symbol = symbol
        self.position = position


class CorruptStream(HuffmanError):
    """The codeword stream cannot be decoded with the given table."""


class TruncatedStream(CorruptStream):
    """The codeword stream ended in the middle of a codeword."""

    def __init__(self, pending: int):
        super().__init__(f"Stream ended with {pending} unresolved codeword symbol(s)")
        self.pending = pending


class CorruptTable(HuffmanError):
    """A codeword table or listing is malformed or not prefix-free."""


class IOFailure(HuffmanError):
    """Reading or writing one of the underlying streams failed."""
