# Bradford Arrington 2025
import sys
from typing import List, Optional

from huff import COMPRESSION_NAME, USAGE, compress_file
from hufferr import HuffmanError
from perftrack import print_ratios, short_program_name, track_performance


def main(argv: Optional[List[str]] = None) -> int:
    arguments = sys.argv if argv is None else argv
    if len(arguments) < 3:
        prog_name = arguments[0] if arguments else "huff-c"
        print(f"\nUsage:  {short_program_name(prog_name)} {USAGE}")
        return 0

    remaining_args = arguments[3:]
    dump = False
    packed = False
    for arg in remaining_args:
        if arg == "-d":
            dump = True
        elif arg == "-p":
            packed = True
        else:
            print(f"Unused argument: {arg}")

    try:
        print(f"\nCompressing {arguments[1]} to {arguments[2]}")
        print(f"Using {COMPRESSION_NAME}\n")
        track_performance("CompressFile", compress_file, arguments[1], arguments[2], packed=packed, dump=dump)
        print_ratios(arguments[1], arguments[2])
    except FileNotFoundError:
        print(f"Error: Input file '{arguments[1]}' not found.")
        return 1
    except (HuffmanError, UnicodeDecodeError) as e:
        print(f"An error occurred: {e}")
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
