import pytest

from ssbpack.binpack import bin_pack, main
from ssbpack.columns import load_encoded_column, padded_length, store_column


def test_header_words():
    values = [9] * 256
    words, _ = bin_pack(values)
    assert words[:4] == [128, 4, len(values), values[0]]


def test_ascending_block_layout():
    words, offsets = bin_pack(list(range(128)))
    assert offsets == [4, len(words)]
    assert words[4] == 0
    assert words[5] == 0x07070707
    assert len(words) == 34


def test_constant_block_has_zero_width():
    words, offsets = bin_pack([7] * 128)
    assert words[4] == 7
    assert words[5] == 0
    assert words[6:] == [0, 0, 0, 0]
    assert offsets[-1] == len(words)


def test_offsets_cover_every_block():
    values = [i * 3 % 1000 for i in range(1024)]
    words, offsets = bin_pack(values)
    assert len(offsets) == len(values) // 128 + 1
    assert offsets == sorted(offsets)
    assert offsets[-1] == len(words)
    for start, block in zip(offsets, range(0, len(values), 128)):
        assert words[start] == min(values[block:block + 128])


def test_words_fit_in_32_bits():
    values = [(i * 2654435761) & 0x7FFFFFFF for i in range(512)]
    words, _ = bin_pack(values)
    assert all(0 <= word <= 0xFFFFFFFF for word in words)


@pytest.mark.parametrize("length", [0, 1, 127, 129])
def test_bad_length(length):
    with pytest.raises(ValueError):
        bin_pack([1] * length)


def test_main_writes_encoded_column(tmp_path, capsys):
    values = [(i * 37) % 50 + 1 for i in range(100)]
    store_column("lo_quantity", values, tmp_path)
    code = main(["lo_quantity", "--data-dir", str(tmp_path), "--length", "100"])
    assert code == 0
    padded = values + [values[-1]] * (padded_length(100) - 100)
    words, offsets = bin_pack(padded)
    column = load_encoded_column("lo_quantity", "bin", 100, tmp_path)
    assert column.data.tolist() == words
    assert column.block_start == offsets
    assert "Loaded Column" in capsys.readouterr().out


def test_main_missing_column(tmp_path):
    assert main(["lo_quantity", "--data-dir", str(tmp_path), "--length", "10"]) == 1


def test_main_needs_column_name():
    with pytest.raises(SystemExit):
        main([])