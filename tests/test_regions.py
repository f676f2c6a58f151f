import pytest

from fmt_builder import eqtb_word, halves, i32, string_region, word
from texfmt import CatCode, EqtbEntry, Format, RangeViolation, eqtb, stringtable
from texfmt.base import MAX_USV


def _home(settings, name):
    h = ord(name[0])
    for c in name[1:]:
        h = (2 * h + ord(c)) % settings.hash_prime
    return settings.hash_base + h


# string pool


def test_string_table_holds_bmp_and_astral_strings():
    data = string_region(["hello", "wörld", "\U0001d538"])
    table, consumed = stringtable.decode(data)
    assert consumed == len(data)
    assert len(table) == 4
    assert list(table.all_sps()) == [0x10000, 0x10001, 0x10002]
    assert table.lookup(0x10000) == "hello"
    assert table.lookup(0x10001) == "wörld"
    assert table.lookup(0x10002) == "\U0001d538"
    assert table.lookup(ord("A")) == "A"
    assert table.get(0x10003) is None
    with pytest.raises(KeyError):
        table.span(0x10003)


def test_empty_string_pool():
    table, _ = stringtable.decode(string_region([]))
    assert len(table) == 0
    assert list(table.all_sps()) == []


def test_string_start_cannot_pass_pool_end():
    data = i32(2) + i32(0x10001) + i32(0) + i32(3) + b"\x00a\x00b"
    with pytest.raises(RangeViolation) as info:
        stringtable.decode(data)
    assert info.value.field == "str_start[1]"
    assert info.value.offset == 12


def test_string_pointer_has_a_floor():
    with pytest.raises(RangeViolation) as info:
        stringtable.decode(i32(0) + i32(0xFFFE))
    assert info.value.field == "str_ptr"


# memory arena


def test_single_free_node_walk(builder):
    builder.lo_words = {5: 77}
    fmt = Format.parse(builder.build())
    mem = fmt.mem
    assert mem.rover == 20
    assert mem.hi_mem_min == builder.settings.hi_mem_stat_min
    assert mem.word(5) == 77
    assert mem.word(20) == halves(0, 1000)
    assert mem.word(21) == halves(20, 0)
    assert mem.word(25) is None
    assert mem.word(builder.lo_mem_max) == 0


def test_free_list_with_several_nodes(builder):
    builder.free_nodes = [(20, 100), (200, 50)]
    builder.lo_words = {150: 9, 300: 11}
    mem = Format.parse(builder.build()).mem
    assert mem.word(150) == 9
    assert mem.word(300) == 11
    assert mem.word(120) == 0
    assert mem.word(60) is None
    assert mem.word(210) is None


def test_backwards_free_link_is_rejected(builder):
    builder.free_nodes = [(200, 50), (20, 100)]
    data = builder.build()
    with pytest.raises(RangeViolation) as info:
        Format.parse(data)
    assert info.value.field == "rlink"
    assert info.value.observed == 20
    assert info.value.offset == builder.offsets["mem"] + 8 + 201 * 8


def test_free_node_cannot_overrun_low_memory(builder):
    builder.free_nodes = [(20, 1001)]
    with pytest.raises(RangeViolation) as info:
        Format.parse(builder.build())
    assert info.value.field == "node_size"


def test_low_memory_bound(builder):
    builder.lo_mem_max = builder.settings.lo_mem_stat_max + 999
    builder.free_nodes = [(20, 900)]
    with pytest.raises(RangeViolation) as info:
        Format.parse(builder.build())
    assert info.value.field == "lo_mem_max"


# equivalences table


def test_eqtb_runs_expand_to_every_slot(builder):
    s = builder.settings
    tilde = s.active_base + ord("~")
    builder.eqtb = {
        s.active_base: eqtb_word(120, 1, 4),
        tilde: eqtb_word(113, 3, -7),
        s.cat_code_base + ord("\\"): eqtb_word(120, 1, 0),
        s.eqtb_size: eqtb_word(80, 1, 42),
    }
    fmt = Format.parse(builder.build())
    assert len(fmt.eqtb) == s.eqtb_size + 1
    assert fmt.eqtb_active(0) == EqtbEntry(ty=120, level=1, value=4)
    assert fmt.eqtb_active(ord("~")) == EqtbEntry(ty=113, level=3, value=-7)
    assert fmt.eqtb_active(ord("a")).ty == s.undefined_cs_command
    assert fmt.eqtb_catcode(ord("\\")) is CatCode.ESCAPE
    assert fmt.eqtb_catcode(ord("a")) is CatCode.OTHER
    assert fmt.eqtb.decode(s.eqtb_size).value == 42


def test_eqtb_accessors_reject_out_of_range_code_points(builder):
    fmt = Format.parse(builder.build())
    with pytest.raises(IndexError):
        fmt.eqtb_active(MAX_USV)
    with pytest.raises(IndexError):
        fmt.eqtb_catcode(-1)


def test_eqtb_hash_extension_words_follow_the_runs(builder):
    s = builder.settings
    builder.hash_high = 2
    builder.eqtb = {s.eqtb_size + 2: eqtb_word(70, 1, 5)}
    fmt = Format.parse(builder.build())
    assert len(fmt.eqtb) == s.eqtb_size + 3
    assert fmt.eqtb.decode(s.eqtb_size + 2) == EqtbEntry(ty=70, level=1, value=5)


def test_eqtb_literal_run_must_be_positive(settings):
    with pytest.raises(RangeViolation) as info:
        eqtb.decode(i32(0), settings, 0)
    assert info.value.field == "eqtb literal run"
    assert info.value.offset == 0


def test_eqtb_repeat_run_cannot_overshoot(settings):
    data = i32(1) + word(0) + i32(settings.eqtb_size)
    with pytest.raises(RangeViolation) as info:
        eqtb.decode(data, settings, 0)
    assert info.value.field == "eqtb repeat run"
    assert info.value.offset == 12


# control-sequence hash


def test_hash_bucket_matches_id_lookup(builder):
    fmt = Format.parse(builder.build())
    assert fmt.cshash.bucket("ab") == builder.settings.hash_base + 292
    assert fmt.cshash.bucket("relax") == _home(builder.settings, "relax")


def test_lookup_of_short_names(builder):
    s = builder.settings
    builder.eqtb = {s.single_base + ord("x"): eqtb_word(60, 1, 3)}
    fmt = Format.parse(builder.build())
    assert fmt.cshash.lookup("", fmt.strings) == s.null_cs
    assert fmt.cshash.lookup("x", fmt.strings) == s.single_base + ord("x")
    assert fmt.lookup_cs("x") == EqtbEntry(ty=60, level=1, value=3)


def test_lookup_in_home_bucket(builder):
    s = builder.settings
    home = _home(s, "relax")
    builder.strings = ["relax"]
    builder.cs_words = {home: halves(0x10000, 0)}
    builder.hash_used = home + 10
    builder.eqtb = {home: eqtb_word(0, 1, 256)}
    fmt = Format.parse(builder.build())
    assert fmt.cshash.lookup("relax", fmt.strings) == home
    assert fmt.lookup_cs("relax") == EqtbEntry(ty=0, level=1, value=256)
    assert fmt.lookup_cs("relay") is None
    assert list(fmt.cshash.entries()) == [(home, 0x10000)]


def test_lookup_follows_chain_into_the_extension(builder):
    s = builder.settings
    home = _home(s, "cd")
    ext = s.eqtb_size + 1
    builder.strings = ["ab", "cd"]
    builder.hash_high = 1
    # "ab" occupies the home slot of "cd", whose entry was pushed to the extension.
    builder.cs_words = {home: halves(0x10000, ext), ext: halves(0x10001, 0)}
    builder.eqtb = {ext: eqtb_word(111, 1, 9)}
    fmt = Format.parse(builder.build())
    assert fmt.cshash.lookup("cd", fmt.strings) == ext
    assert fmt.lookup_cs("cd") == EqtbEntry(ty=111, level=1, value=9)
    assert fmt.cshash.next(home) == ext
    assert fmt.cshash.text(ext) == 0x10001


def test_dense_tail_entries_are_found(builder):
    s = builder.settings
    home = _home(s, "relax")
    builder.strings = ["relax"]
    builder.hash_used = s.hash_base + 1
    builder.cs_words = {home: halves(0x10000, 0)}
    fmt = Format.parse(builder.build())
    assert fmt.cshash.lookup("relax", fmt.strings) == home


def test_lookup_stops_on_a_cyclic_chain(builder):
    s = builder.settings
    home = _home(s, "cd")
    builder.strings = ["ab", "cd"]
    builder.cs_words = {home: halves(0x10000, home)}
    fmt = Format.parse(builder.build())
    assert fmt.cshash.lookup("cd", fmt.strings) is None


def test_hash_positions_must_increase(builder):
    s = builder.settings
    builder.hash_used = s.hash_base + 5
    data = bytearray(builder.build())
    start = builder.offsets["cshash"]
    # hash_used, then a record that jumps past hash_used
    data[start + 4 : start + 8] = i32(s.hash_base + 6)
    with pytest.raises(RangeViolation) as info:
        Format.parse(bytes(data))
    assert info.value.field == "hash position"
    assert info.value.offset == start + 4
