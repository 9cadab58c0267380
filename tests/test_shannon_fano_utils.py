import random

import pytest

from shannon_fano_utils import (
    average_code_length,
    balanced_mid,
    bits_to_bytes,
    build_code_table,
    build_frequency_list,
    bytes_to_bits,
    code_from_string,
    code_to_string,
    decode_bytes,
    encode_bytes,
    entropy_bits,
    is_prefix_free,
    shannon_fano_codes,
)


def _random_bytes(seed, n, alphabet=256):
    rng = random.Random(seed)
    return bytes(rng.randrange(alphabet) for _ in range(n))


def _skewed_text(seed, n):
    rng = random.Random(seed)
    return bytes(rng.choices(b"eeeeeeetttaaoinshrdlu \n", k=n))


def test_frequency_list_sorted_by_count():
    assert build_frequency_list(b"aabbc") == [(97, 2), (98, 2), (99, 1)]
    assert build_frequency_list(b"abbccc") == [(99, 3), (98, 2), (97, 1)]


def test_frequency_list_ties_keep_first_seen_order():
    assert build_frequency_list(b"bbaa") == [(98, 2), (97, 2)]
    assert build_frequency_list(b"cab") == [(99, 1), (97, 1), (98, 1)]
    assert build_frequency_list(b"\xff\x00\xff\x00") == [(255, 2), (0, 2)]


def test_frequency_list_counts_every_symbol_once():
    data = _random_bytes(1, 3000)
    pairs = build_frequency_list(data)
    assert sorted(sym for sym, _ in pairs) == sorted(set(data))
    assert sum(count for _, count in pairs) == len(data)
    for sym, count in pairs:
        assert data.count(bytes([sym])) == count


def test_frequency_list_empty_input():
    with pytest.raises(ValueError):
        build_frequency_list(b"")


def test_balanced_mid_simple():
    assert balanced_mid([2, 2, 1]) == 0
    assert balanced_mid([1, 1]) == 0
    assert balanced_mid([1, 1, 1, 1]) == 1
    assert balanced_mid([7]) == 0


def test_balanced_mid_tie_picks_lowest_index():
    # both splits leave an imbalance of 1
    assert balanced_mid([1, 1, 1]) == 0
    assert balanced_mid([1, 2, 1]) == 0


def test_balanced_mid_sub_range():
    assert balanced_mid([5, 2, 2, 1], 1, 4) == 1
    assert balanced_mid([5, 2, 2, 1], 2, 4) == 2


def test_balanced_mid_matches_brute_force():
    rng = random.Random(7)
    for _ in range(200):
        counts = sorted((rng.randint(1, 50) for _ in range(rng.randint(2, 20))), reverse=True)
        best = min(
            (abs(sum(counts[:i + 1]) - sum(counts[i + 1:])), i)
            for i in range(len(counts) - 1)
        )
        assert balanced_mid(counts) == best[1]


def test_balanced_mid_empty_range():
    with pytest.raises(ValueError):
        balanced_mid([1, 2], 1, 1)


def test_code_table_example():
    pairs = build_frequency_list(b"aabbc")
    assert build_code_table(pairs) == {97: (0,), 98: (1, 0), 99: (1, 1)}


def test_code_table_single_symbol():
    pairs, codes = shannon_fano_codes(b"aaaa")
    assert pairs == [(97, 4)]
    assert codes == {97: (0,)}


def test_code_table_two_symbols_tied():
    _, codes = shannon_fano_codes(b"baba")
    assert codes == {98: (0,), 97: (1,)}


def test_code_table_equal_counts():
    _, codes = shannon_fano_codes(b"abc")
    assert codes == {97: (0,), 98: (1, 0), 99: (1, 1)}


def test_code_table_duplicate_symbol():
    with pytest.raises(ValueError):
        build_code_table([(1, 2), (1, 1)])


def test_code_table_empty_list():
    with pytest.raises(ValueError):
        build_code_table([])


@pytest.mark.parametrize("seed", [0, 1, 2])
def test_code_table_prefix_free_and_covering(seed):
    for data in (_random_bytes(seed, 2000), _skewed_text(seed, 2000), bytes(range(256))):
        pairs, codes = shannon_fano_codes(data)
        assert set(codes) == set(data)
        assert len(codes) == len(pairs)
        assert is_prefix_free(codes)
        assert all(len(code) >= 1 for code in codes.values())


def test_more_frequent_symbols_get_shorter_codes():
    pairs, codes = shannon_fano_codes(_skewed_text(3, 5000))
    lengths = [len(codes[sym]) for sym, _ in pairs]
    assert lengths[0] == min(lengths)
    assert lengths[0] < lengths[-1]


def test_is_prefix_free():
    assert is_prefix_free({1: (0,), 2: (1, 0), 3: (1, 1)})
    assert not is_prefix_free({1: (0,), 2: (0, 1)})
    assert not is_prefix_free({1: (1, 0), 2: (1, 0)})
    assert not is_prefix_free({1: ()})


def test_code_strings():
    assert code_to_string((1, 0, 1, 1)) == "1011"
    assert code_to_string([True, False]) == "10"
    assert code_from_string("0110") == (0, 1, 1, 0)
    for bad in ("", "012", "ab"):
        with pytest.raises(ValueError):
            code_from_string(bad)


def test_bits_to_bytes_lsb_first():
    assert bits_to_bytes([1, 0, 0, 0, 0, 0, 0, 0]) == b"\x01"
    assert bits_to_bytes([0, 1]) == b"\x02"
    assert bits_to_bytes([0, 0, 0, 0, 0, 0, 0, 1, 1]) == b"\x80\x01"
    assert bits_to_bytes([]) == b""


def test_bytes_to_bits():
    assert bytes_to_bits(b"\x01") == [1, 0, 0, 0, 0, 0, 0, 0]
    assert bytes_to_bits(b"\x80\x01", 9) == [0, 0, 0, 0, 0, 0, 0, 1, 1]
    assert bytes_to_bits(b"\x06", 3) == [0, 1, 1]
    with pytest.raises(ValueError):
        bytes_to_bits(b"\x00", 9)


def test_encode_example_bytes():
    data = b"aabbc"
    _, codes = shannon_fano_codes(data)
    # bits 0 0 10 10 11 -> bits 2, 4, 6, 7 set
    assert encode_bytes(data, codes) == bytes([0, 212])


def test_encode_single_symbol_padding():
    _, codes = shannon_fano_codes(b"aaaa")
    assert encode_bytes(b"aaaa", codes) == b"\x04\x00"
    assert decode_bytes(b"\x04\x00", codes) == b"aaaa"


def test_encode_missing_symbol():
    with pytest.raises(ValueError):
        encode_bytes(b"abc", {97: (0,), 98: (1,)})


@pytest.mark.parametrize("seed", [0, 1, 2, 3])
def test_header_is_padding_count(seed):
    data = _skewed_text(seed, 500 + seed)
    _, codes = shannon_fano_codes(data)
    packed = encode_bytes(data, codes)
    total_bits = sum(len(codes[b]) for b in data)
    assert len(packed) - 1 == (total_bits + 7) // 8
    assert packed[0] == 8 * (len(packed) - 1) - total_bits
    assert 0 <= packed[0] <= 7


@pytest.mark.parametrize(
    "data",
    [
        b"aabbc",
        b"a",
        b"ab",
        b"aaaa",
        b"\x00\x00\x00\xff",
        b"This is a test" * 20,
        bytes(range(256)),
    ],
)
def test_roundtrip_fixed(data):
    _, codes = shannon_fano_codes(data)
    assert decode_bytes(encode_bytes(data, codes), codes) == data


def test_roundtrip_random():
    for seed in range(3):
        data = _random_bytes(seed, 1500)
        _, codes = shannon_fano_codes(data)
        assert decode_bytes(encode_bytes(data, codes), codes) == data


def test_decode_empty_payload():
    assert decode_bytes(b"\x00", {97: (0,)}) == b""


def test_decode_rejects_bad_headers():
    codes = {97: (0,)}
    with pytest.raises(ValueError):
        decode_bytes(b"", codes)
    with pytest.raises(ValueError):
        decode_bytes(b"\x08\x00", codes)
    with pytest.raises(ValueError):
        decode_bytes(b"\x03", codes)


def test_decode_with_wrong_table():
    data = b"aabbc"
    _, codes = shannon_fano_codes(data)
    packed = encode_bytes(data, codes)
    with pytest.raises(ValueError):
        decode_bytes(packed, {97: (1, 1)})


def test_average_code_length_and_entropy():
    pairs, codes = shannon_fano_codes(b"aabbc")
    assert average_code_length(pairs, codes) == pytest.approx(1.6)
    assert entropy_bits(pairs) <= average_code_length(pairs, codes)
    assert entropy_bits([(1, 1), (2, 1)]) == pytest.approx(1.0)
    assert entropy_bits([(1, 9)]) == pytest.approx(0.0)
    assert entropy_bits([]) == 0.0
