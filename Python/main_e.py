# Bradford Arrington 2025
import sys
from typing import List, Optional

from huff import COMPRESSION_NAME, expand_file
from hufferr import HuffmanError
from perftrack import short_program_name, track_performance

USAGE = "infile outfile [-d]\n\nSpecifying -d will dump the codeword listing\n"


def main(argv: Optional[List[str]] = None) -> int:
    arguments = sys.argv if argv is None else argv
    if len(arguments) < 3:
        prog_name = arguments[0] if arguments else "huff-e"
        print(f"\nUsage:  {short_program_name(prog_name)} {USAGE}")
        return 0

    remaining_args = arguments[3:]
    dump = False
    for arg in remaining_args:
        if arg == "-d":
            dump = True
        else:
            print(f"Unused argument: {arg}")

    try:
        print(f"\nDecompressing {arguments[1]} to {arguments[2]}")
        print(f"Using {COMPRESSION_NAME}\n")
        track_performance("ExpandFile", expand_file, arguments[1], arguments[2], dump=dump)
    except FileNotFoundError:
        print(f"Error: Input file '{arguments[1]}' not found.")
        return 1
    except (HuffmanError, UnicodeDecodeError) as e:
        print(f"An error occurred: {e}")
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
