import pytest

from ssbpack.columns import load_encoded_column, padded_length, store_column
from ssbpack.deltabinpack import delta, delta_bin_pack, main


def test_delta_values():
    assert delta([5, 7, 4]) == [0, 2, -3]


def test_delta_empty_and_single():
    assert delta([]) == []
    assert delta([42]) == [0]


def test_delta_wraps_to_int32():
    result = delta([-(2**31), 2**31 - 1])
    assert result[1] == -1


def test_header_and_first_value():
    values = list(range(1000, 1512))
    words, offsets = delta_bin_pack(values)
    assert words[:4] == [128, 4, 512, 1000]
    assert words[4] == 1000
    assert offsets[0] == 5


def test_ascending_tile_blocks():
    words, offsets = delta_bin_pack(list(range(512)))
    assert len(offsets) == 5
    assert offsets[-1] == len(words)
    assert words[offsets[0]] == 0
    assert words[offsets[1]] == 1
    assert words[offsets[1] + 1] == 0


def test_negative_minimum_stored_as_word():
    values = [10, 5] + [5] * 510
    words, offsets = delta_bin_pack(values)
    assert words[offsets[0]] == (-5) & 0xFFFFFFFF
    assert all(0 <= word <= 0xFFFFFFFF for word in words)


def test_each_tile_stores_its_first_value():
    values = [(i * 7919) % 100000 - 50000 for i in range(1536)]
    words, offsets = delta_bin_pack(values)
    for tile in range(3):
        first_block = offsets[tile * 4]
        assert words[first_block - 1] == values[tile * 512] & 0xFFFFFFFF


@pytest.mark.parametrize("length", [0, 128, 511, 513])
def test_bad_length(length):
    with pytest.raises(ValueError):
        delta_bin_pack([3] * length)


def test_main_writes_encoded_column(tmp_path, capsys):
    values = [(i * 131) % 977 - 400 for i in range(700)]
    store_column("lo_revenue", values, tmp_path, signed=True)
    code = main(["lo_revenue", "--data-dir", str(tmp_path), "--length", "700"])
    assert code == 0
    padded = values + [values[-1]] * (padded_length(700) - 700)
    words, offsets = delta_bin_pack(padded)
    column = load_encoded_column("lo_revenue", "dbin", 700, tmp_path)
    assert column.data.tolist() == words
    assert column.block_start == offsets
    assert "Loaded Column" in capsys.readouterr().out


def test_main_unknown_column(tmp_path):
    assert main(["zzz", "--data-dir", str(tmp_path), "--length", "10"]) == 1