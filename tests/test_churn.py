import churn


def make_tree(root):
    (root / "texts").mkdir()
    (root / "texts" / "a.txt").write_text("The blood is the life!\n" * 10, encoding="utf-8")
    (root / "texts" / "nested").mkdir()
    (root / "texts" / "nested" / "b.txt").write_text("Welcome to my house.\r\nEnter freely.\r\n", encoding="utf-8")
    (root / "texts" / "c.zip").write_bytes(b"PK\x03\x04")
    return root / "texts"


def test_churn_passes_text_files(tmp_path, capsys):
    texts = make_tree(tmp_path)
    work = tmp_path / "work"
    work.mkdir()

    program = churn.ChurnProgram(str(work))
    assert program.main([str(texts)]) == 0
    assert program.total_files == 2
    assert program.total_passed == 2

    log = (work / "CHURN.LOG").read_text(encoding="utf-8")
    assert log.count("Passed") == 2
    assert "c.zip" not in log
    assert "Total failed:  0" in log
    assert "Testing" in capsys.readouterr().err


def test_churn_text_codewords(tmp_path):
    texts = make_tree(tmp_path)
    program = churn.ChurnProgram(str(tmp_path))
    assert program.main([str(texts), "-t"]) == 0
    assert not program.packed
    assert program.total_passed == 2


def test_churn_records_failures(tmp_path):
    texts = make_tree(tmp_path)
    (texts / "latin1.txt").write_bytes(b"caf\xe9\n")
    (texts / "empty.txt").write_bytes(b"")
    work = tmp_path / "work"
    work.mkdir()

    program = churn.ChurnProgram(str(work))
    assert program.main([str(texts)]) == 1
    assert program.total_files == 4
    assert program.total_failed == 2

    log = (work / "CHURN.LOG").read_text(encoding="utf-8")
    assert log.count("Failed: ") == 2
    assert "Total passed:  2" in log


def test_churn_usage(tmp_path, capsys):
    assert churn.ChurnProgram(str(tmp_path)).main([]) == 1
    assert "Usage: churn root-dir" in capsys.readouterr().out


def test_files_are_equal(tmp_path):
    first = tmp_path / "first"
    second = tmp_path / "second"
    first.write_bytes(b"abc")
    second.write_bytes(b"abd")
    program = churn.ChurnProgram(str(tmp_path))
    assert program.files_are_equal(str(first), str(first))
    assert not program.files_are_equal(str(first), str(second))
    assert not program.files_are_equal(str(first), str(tmp_path / "missing"))
