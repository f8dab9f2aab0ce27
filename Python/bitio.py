#Bradford Arrington 2025
import struct
import sys
from io import FileIO
from typing import Iterator

from hufferr import CorruptStream, IOFailure, TruncatedStream


class CompressorBitio:
    PACIFIER_COUNT = 2047
    MAGIC = b"HUF1"
    HEADER = struct.Struct(">4sI") # magic, number of codeword symbols
    MAX_SYMBOLS = 0xFFFFFFFF

    @staticmethod
    def is_packed_file(name: str) -> bool:
        with open(name, "rb") as f:
            return f.read(len(CompressorBitio.MAGIC)) == CompressorBitio.MAGIC

    class BitFile:
        def __init__(self, name: str, input_mode: bool):
            self.is_input = input_mode
            mode = "rb" if input_mode else "wb"
            try:
                self.file_stream: FileIO = open(name, mode)
            except OSError as e:
                raise IOFailure(f"Cannot open bit file {name}: {e}") from e
            self.rack: int = 0
            self.mask: int = 0x80
            self.pacifier_counter: int = 0

        @staticmethod
        def open_output_bit_file(name: str) -> 'CompressorBitio.BitFile':
            return CompressorBitio.BitFile(name, False)

        @staticmethod
        def open_input_bit_file(name: str) -> 'CompressorBitio.BitFile':
            return CompressorBitio.BitFile(name, True)

        def close_bit_file(self):
            try:
                if not self.is_input and self.mask != 0x80:
                    self.file_stream.write(bytes([self.rack]))
            except OSError as e:
                raise IOFailure(f"Fatal error in CloseBitFile! {e}") from e
            finally:
                self.file_stream.close()

        def write_header(self, symbol_count: int):
            if not 0 <= symbol_count <= CompressorBitio.MAX_SYMBOLS:
                raise CorruptStream(f"Cannot pack {symbol_count} codeword symbols, "
                                    f"the header holds at most {CompressorBitio.MAX_SYMBOLS}")
            try:
                self.file_stream.write(CompressorBitio.HEADER.pack(CompressorBitio.MAGIC, symbol_count))
            except OSError as e:
                raise IOFailure(f"Fatal error writing header! {e}") from e

        def read_header(self) -> int:
            header = self.file_stream.read(CompressorBitio.HEADER.size)
            if len(header) != CompressorBitio.HEADER.size:
                raise CorruptStream("Packed stream is missing its header")
            magic, symbol_count = CompressorBitio.HEADER.unpack(header)
            if magic != CompressorBitio.MAGIC:
                raise CorruptStream(f"Bad packed stream magic {magic!r}")
            return symbol_count

        def _write_rack(self):
            try:
                self.file_stream.write(bytes([self.rack]))
                self.pacifier_counter += 1
                if (self.pacifier_counter & CompressorBitio.PACIFIER_COUNT) == 0:
                    sys.stdout.write(".")
                    sys.stdout.flush()
            except OSError as e:
                raise IOFailure(f"Fatal error in OutputBit! {e}") from e
            self.rack = 0
            self.mask = 0x80

        def output_bits(self, code: int, count: int):
            mask_code: int = 1 << (count - 1)
            while mask_code != 0:
                if (mask_code & code) != 0:
                    self.rack |= self.mask
                self.mask >>= 1
                if self.mask == 0:
                    self._write_rack()
                mask_code >>= 1

        def input_bit(self) -> int:
            if self.mask == 0x80:
                read = self.file_stream.read(1)
                if not read:
                    raise EOFError("End of file reached in InputBit")
                self.rack = ord(read)
                self.pacifier_counter += 1
                if (self.pacifier_counter & CompressorBitio.PACIFIER_COUNT) == 0:
                    sys.stdout.write(".")
                    sys.stdout.flush()
            value = self.rack & self.mask
            self.mask >>= 1
            if self.mask == 0:
                self.mask = 0x80
            return 1 if value != 0 else 0

        def input_symbols(self, symbol_count: int) -> Iterator[str]:
            """Yields ``symbol_count`` bits as "0"/"1" codeword symbols."""
            for position in range(symbol_count):
                try:
                    bit = self.input_bit()
                except EOFError:
                    raise TruncatedStream(symbol_count - position) from None
                yield "1" if bit else "0"
