import os
import sys
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from huff import LISTING_SUFFIX, compress_file, expand_file
from perftrack import compression_ratio


class ChurnProgram:
    """Compresses and expands every file under a directory and logs the results."""

    COMPRESSED_EXTENSIONS = {".zip", ".gz", ".bz2", ".xz", ".7z", ".lzh", ".arc", ".gif", ".png", ".jpg"}

    def __init__(self, work_dir: str = ".", packed: bool = True):
        self.total_files = 0
        self.total_passed = 0
        self.total_failed = 0
        self.work_dir = work_dir
        self.packed = packed
        self.compressed_name = os.path.join(work_dir, "TEST.CMP")
        self.expanded_name = os.path.join(work_dir, "TEST.OUT")
        self.log_file = None

    def main(self, args: List[str]) -> int:
        if not args or len(args) > 2 or (len(args) == 2 and args[1] != "-t"):
            self.usage()
            return 1

        root_dir = args[0]
        if len(args) == 2:
            self.packed = False

        log_name = os.path.join(self.work_dir, "CHURN.LOG")
        with open(log_name, "w", encoding="utf-8") as self.log_file:
            self.write_log_header()

            start_time = datetime.now()
            self.churn_files(root_dir)
            stop_time = datetime.now()

            self.write_log_summary(start_time, stop_time)
        self.log_file = None

        return 0 if self.total_failed == 0 else 1

    def churn_files(self, path: str):
        try:
            entries = sorted(os.scandir(path), key=lambda entry: entry.name)
        except PermissionError as ex:
            print(f"Access denied to {path}: {ex}", file=sys.stderr)
            return

        for entry in entries:
            if entry.is_dir(follow_symlinks=False):
                self.churn_files(entry.path)
            elif entry.is_file(follow_symlinks=False):
                if self.is_scratch_file(entry.path) or self.file_is_already_compressed(entry.path):
                    continue
                print(f"Testing {entry.path}", file=sys.stderr)
                if not self.compress(entry.path):
                    print("Comparison failed!", file=sys.stderr)

    def is_scratch_file(self, name: str) -> bool:
        scratch = {self.compressed_name, self.compressed_name + LISTING_SUFFIX,
                   self.expanded_name, os.path.join(self.work_dir, "CHURN.LOG")}
        return os.path.abspath(name) in {os.path.abspath(s) for s in scratch}

    def file_is_already_compressed(self, name: str) -> bool:
        extension = Path(name).suffix.lower()
        return extension in self.COMPRESSED_EXTENSIONS

    def compress(self, file_name: str) -> bool:
        self.log_file.write(f"{file_name:<40} ")
        self.total_files += 1
        try:
            compress_file(file_name, self.compressed_name, packed=self.packed)
            expand_file(self.compressed_name, self.expanded_name)
        except Exception as ex:
            # Any failure, including undecodable input, counts against the file
            self.total_failed += 1
            self.log_file.write(f"Failed: {ex}\n")
            return False

        old_size = os.path.getsize(file_name)
        new_size = os.path.getsize(self.compressed_name)
        self.log_file.write(f" {old_size:8} {new_size:8} ")
        self.log_file.write(f"{compression_ratio(old_size, new_size):4}%  ")

        if not self.files_are_equal(file_name, self.expanded_name):
            self.log_file.write("Failed\n")
            self.total_failed += 1
            return False

        self.log_file.write("Passed\n")
        self.total_passed += 1
        return True

    def files_are_equal(self, file1: str, file2: str) -> bool:
        """Compare two files byte by byte"""
        if not os.path.exists(file1) or not os.path.exists(file2):
            return False

        if os.path.getsize(file1) != os.path.getsize(file2):
            return False

        with open(file1, "rb") as f1, open(file2, "rb") as f2:
            while True:
                byte1 = f1.read(4096)
                byte2 = f2.read(4096)

                if byte1 != byte2:
                    return False

                if not byte1:  # End of both files
                    return True

    def write_log_header(self):
        self.log_file.write("                                          Original   Packed\n")
        self.log_file.write("            File Name                     Size      Size   Ratio  Result\n")
        self.log_file.write("-------------------------------------     --------  --------  ----  ------\n")

    def write_log_summary(self, start_time: datetime, stop_time: datetime):
        elapsed_time = (stop_time - start_time).total_seconds()
        self.log_file.write(f"\nTotal elapsed time: {elapsed_time:.2f} seconds\n")
        self.log_file.write(f"Total files:   {self.total_files}\n")
        self.log_file.write(f"Total passed:  {self.total_passed}\n")
        self.log_file.write(f"Total failed:  {self.total_failed}\n")

    def usage(self):
        usage = """
CHURN 1.0. Usage: churn root-dir [-t]

CHURN tests the Huffman coder by compressing and expanding all files in a directory.
Specifying -t writes codewords as text instead of packing them into bits.

Example:
  churn ./texts
"""
        print(usage)


def main(argv: Optional[List[str]] = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    return ChurnProgram().main(args)


if __name__ == "__main__":
    sys.exit(main())
