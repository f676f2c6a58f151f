import logging

import pytest

import fmt_dump
import fmt_regions
from fmt_builder import eqtb_word, halves


@pytest.fixture(autouse=True)
def detach_cli_logging():
    yield
    logger = logging.getLogger("texfmt")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


def _write(tmp_path, builder, name="test.fmt"):
    path = tmp_path / name
    path.write_bytes(builder.build())
    return path


def test_dump_strings(tmp_path, builder, capsys):
    builder.strings = ["fi"]
    path = _write(tmp_path, builder)
    assert fmt_dump.main([str(path), "strings"]) == 0
    assert capsys.readouterr().out == '65536 = "fi"\n'


def test_dump_lookup_defined_and_undefined(tmp_path, builder, capsys):
    s = builder.settings
    home = s.hash_base + 292  # "ab"
    builder.strings = ["ab"]
    builder.cs_words = {home: halves(0x10000, 0)}
    builder.eqtb = {home: eqtb_word(0, 1, 256)}
    path = _write(tmp_path, builder)

    assert fmt_dump.main([str(path), "lookup", "ab"]) == 0
    assert capsys.readouterr().out == "\\ab => ty=0 level=1 value=256\n"

    assert fmt_dump.main([str(path), "lookup", "zz"]) == 1
    assert "\\zz is not defined" in capsys.readouterr().err


def test_dump_rejects_corrupt_file(tmp_path, builder, capsys):
    builder.header_magic = 0
    path = _write(tmp_path, builder)
    assert fmt_dump.main([str(path), "catcodes"]) == 1
    err = capsys.readouterr().err
    assert err.startswith("[error] ")
    assert "header magic @ 0x0" in err


def test_region_map_is_printed_and_logged(tmp_path, builder, capsys):
    builder.strings = ["x-y"]
    path = _write(tmp_path, builder)
    log = tmp_path / "out" / "regions.txt"
    assert fmt_regions.main([str(path), "--log", str(log)]) == 0
    out = capsys.readouterr().out.splitlines()
    assert out[0].startswith(f"[+] {path}: ")
    assert out[0].endswith(f"format serial {builder.serial}")
    assert out[1].startswith("header ")
    assert out[-1] == f"[+] Region map written to {log}"
    assert log.read_text(encoding="utf-8").splitlines() == out[1:-1]


def test_region_map_stops_at_first_bad_region(tmp_path, builder, capsys):
    builder.footer_magic = 1
    path = _write(tmp_path, builder)
    assert fmt_regions.main([str(path), "-v"]) == 1
    captured = capsys.readouterr()
    lines = captured.out.splitlines()
    assert lines[-1].startswith("trie ")
    assert "footer magic" in captured.err


def test_region_map_log_kept_for_rejected_file(tmp_path, builder, capsys):
    builder.footer_magic = 1
    path = _write(tmp_path, builder)
    log = tmp_path / "regions.txt"
    assert fmt_regions.main([str(path), "--log", str(log)]) == 1
    printed = capsys.readouterr().out.splitlines()
    assert log.read_text(encoding="utf-8").splitlines() == printed
