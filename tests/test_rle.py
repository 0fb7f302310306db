"""Tests for run-length decoding of ROW/SPID streams."""

from amion_sch.domain.entities import RawByteBlock
from amion_sch.services.rle import MAX_RUN, decode_rle, encode_rle, is_patch_marker


def _block(*values):
    return RawByteBlock.from_values(values)


def test_decode_expands_count_value_pairs():
    """[5,7, 3,0] after the header decodes to five 7s then three 0s."""
    result = decode_rle(_block(0, 0, 5, 7, 3, 0))

    assert result.values == [7, 7, 7, 7, 7, 0, 0, 0]
    assert result.patch_offset is None
    assert result.resyncs == 0


def test_every_valid_count_emits_that_many_copies():
    for count in range(1, MAX_RUN + 1):
        result = decode_rle(_block(0, 0, count, 42))
        assert result.values == [42] * count


def test_header_bytes_are_skipped():
    # Header bytes look like a valid pair but must not be decoded
    result = decode_rle(_block(2, 9, 1, 4))
    assert result.values == [4]

    result = decode_rle(_block(2, 9, 1, 4), header_size=0)
    assert result.values == [9, 9, 4]


def test_out_of_range_count_resynchronizes():
    """A count of 0 or above the run limit skips one byte and decoding resumes."""
    result = decode_rle(_block(0, 0, 60, 2, 9))
    assert result.values == [9, 9]
    assert result.resyncs == 1

    result = decode_rle(_block(0, 0, 0, 3, 1))
    assert result.values == [1, 1, 1]
    assert result.resyncs == 1


def test_trailing_odd_byte_is_ignored():
    result = decode_rle(_block(0, 0, 2, 1, 3))
    assert result.values == [1, 1]


def test_patch_marker_stops_linear_decoding():
    block = _block(0, 0, 2, 1, 252, 7, 3, 0, 5)
    result = decode_rle(block)

    assert result.values == [1, 1]
    assert result.patch_offset == 4
    assert is_patch_marker(block, 4)


def test_252_without_tag_is_not_a_marker():
    block = _block(0, 0, 252, 1, 2, 4)
    assert not is_patch_marker(block, 2)

    result = decode_rle(block)
    assert result.patch_offset is None
    assert result.values == [2]


def test_empty_and_header_only_blocks():
    assert decode_rle(RawByteBlock()).values == []
    assert decode_rle(_block(0, 0)).values == []


def test_encode_splits_long_runs():
    block = encode_rle([1] * 60)
    assert block.values() == [0, 0, 50, 1, 10, 1]


def test_plain_stream_round_trip():
    original = [1] * 60 + [2, 2, 0, 0, 0, 250] + [3] + [255] * 4
    decoded = decode_rle(encode_rle(original)).values
    assert decoded == original

    # Re-encoding the decoded sequence reproduces it again
    assert decode_rle(encode_rle(decoded)).values == original
