import main_c
import main_e
import perftrack
from huff import LISTING_SUFFIX

TEXT = "Listen to them, the children of the night. What music they make!\n"


def test_compress_usage(capsys):
    assert main_c.main(["huff-c.py"]) == 0
    assert "Usage:  huff-c infile outfile" in capsys.readouterr().out


def test_expand_usage(capsys):
    assert main_e.main(["C:\\tools\\huff-e.exe", "only-one"]) == 0
    assert "Usage:  huff-e infile outfile" in capsys.readouterr().out


def test_round_trip_through_drivers(tmp_path, capsys):
    source = tmp_path / "dracula.txt"
    source.write_text(TEXT, encoding="utf-8")
    compressed = tmp_path / "dracula.huff"
    decoded = tmp_path / "dracula_decoded.txt"

    assert main_c.main(["huff-c", str(source), str(compressed), "-p", "-d"]) == 0
    out = capsys.readouterr().out
    assert f"Compressing {source} to {compressed}" in out
    assert "CompressFile" in out
    assert "Compression ratio:" in out
    assert "node='L'  count=  1  Huffman code=" in out
    assert (tmp_path / ("dracula.huff" + LISTING_SUFFIX)).exists()

    assert main_e.main(["huff-e", str(compressed), str(decoded), "-d"]) == 0
    out = capsys.readouterr().out
    assert f"Decompressing {compressed} to {decoded}" in out
    assert "\\n: " in out
    assert decoded.read_text(encoding="utf-8") == TEXT


def test_unused_argument(tmp_path, capsys):
    source = tmp_path / "in.txt"
    source.write_text("abc", encoding="utf-8")
    assert main_c.main(["huff-c", str(source), str(tmp_path / "out"), "-x"]) == 0
    assert "Unused argument: -x" in capsys.readouterr().out


def test_missing_input(tmp_path, capsys):
    missing = tmp_path / "missing.txt"
    assert main_c.main(["huff-c", str(missing), str(tmp_path / "out")]) == 1
    assert f"Error: Input file '{missing}' not found." in capsys.readouterr().out


def test_empty_input_reports_error(tmp_path, capsys):
    source = tmp_path / "empty.txt"
    source.write_text("", encoding="utf-8")
    assert main_c.main(["huff-c", str(source), str(tmp_path / "out")]) == 1
    assert "An error occurred: No characters" in capsys.readouterr().out


def test_corrupt_stream_reports_error(tmp_path, capsys):
    source = tmp_path / "in.txt"
    source.write_text("aabbbcccc", encoding="utf-8")
    compressed = tmp_path / "in.huff"
    decoded = tmp_path / "out.txt"
    assert main_c.main(["huff-c", str(source), str(compressed)]) == 0

    with open(compressed, "a", encoding="ascii") as f:
        f.write("2")
    assert main_e.main(["huff-e", str(compressed), str(decoded)]) == 1
    assert "An error occurred: Invalid symbol '2'" in capsys.readouterr().out
    assert not decoded.exists()


def test_short_program_name():
    assert perftrack.short_program_name("/usr/bin/huff-c") == "huff-c"
    assert perftrack.short_program_name("C:\\bin\\main_c.py") == "main_c"
    assert perftrack.short_program_name("main_e") == "main_e"


def test_compression_ratio():
    assert perftrack.compression_ratio(200, 50) == 75
    assert perftrack.compression_ratio(0, 0) == 100
    assert perftrack.compression_ratio(100, 800) == -700


def test_track_performance_returns_result(capsys):
    assert perftrack.track_performance("Add", lambda a, b: a + b, 2, 3) == 5
    out = capsys.readouterr().out
    assert out.splitlines()[-1].startswith("Add")


def test_file_size(tmp_path):
    path = tmp_path / "sized.bin"
    path.write_bytes(b"12345")
    assert perftrack.file_size(str(path)) == 5
    assert perftrack.file_size(str(tmp_path / "missing")) == 0
