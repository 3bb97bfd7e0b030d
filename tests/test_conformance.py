import hashlib

import pytest

from md5engine.conformance import check, check_lanes, load_vectors, report
from md5engine.md5 import md5, md5_blocks
from md5engine.words import bytes_to_words


def test_bundled_vectors_load():
    vectors = load_vectors()
    assert len(vectors) >= 7
    assert vectors[0] == {'message': b'', 'digest': bytes.fromhex('d41d8cd98f00b204e9800998ecf8427e')}


def test_scalar_engine_conforms():
    assert check(md5) == []


def test_lane_engine_conforms():
    assert check_lanes() == []


def test_divergent_implementation_is_reported(capsys):
    # an implementation that hashes the wrong bytes disagrees on every vector
    mismatches = check(lambda m: md5(m + b'!'))
    assert len(mismatches) == len(load_vectors())
    assert mismatches[0]['expected'] == 'd41d8cd98f00b204e9800998ecf8427e'

    assert report(mismatches, 'broken') is False
    assert '[fail]' in capsys.readouterr().out
    assert report([], 'md5') is True


def test_custom_vectors_file(tmp_path):
    path = tmp_path / 'vectors.yaml'
    path.write_text('- message: "abc"\n  digest: "900150983CD24FB0D6963F7D28E17F72"\n', encoding = 'utf-8')
    vectors = load_vectors(path)
    assert check(md5, vectors) == []


def _write(tmp_path, text):
    path = tmp_path / 'vectors.yaml'
    path.write_text(text, encoding = 'utf-8')
    return path


@pytest.mark.parametrize('entry', ['message: 0123', 'message: yes', 'hex: 616263', 'message: ["abc"]'])
def test_unquoted_scalars_are_rejected(tmp_path, entry):
    # YAML reads 0123 as the int 83 and yes as True, neither is the text that was written
    with pytest.raises(TypeError):
        load_vectors(_write(tmp_path, f'- {entry}\n  digest: "900150983cd24fb0d6963f7d28e17f72"\n'))


def test_quoted_numeric_message_is_kept_verbatim(tmp_path):
    vectors = load_vectors(_write(tmp_path, '- message: "0123"\n'))
    assert vectors == [{'message': b'0123', 'digest': hashlib.md5(b'0123').digest()}]


def test_hex_messages_carry_binary_input(tmp_path):
    vectors = load_vectors(_write(tmp_path, '- hex: "00ff80"\n  digest: "%s"\n' % hashlib.md5(b'\x00\xff\x80').hexdigest()))
    assert vectors[0]['message'] == b'\x00\xff\x80'
    assert check(md5, vectors) == []


@pytest.mark.parametrize('entry', ['- message: "a"\n  hex: "61"\n', '- digest: "d41d8cd98f00b204e9800998ecf8427e"\n'])
def test_vector_needs_exactly_one_message_field(tmp_path, entry):
    with pytest.raises(ValueError):
        load_vectors(_write(tmp_path, entry))


def test_bundled_suite_covers_padding_boundaries():
    lengths = {len(v['message']) for v in load_vectors()}
    assert {55, 56, 57, 63, 64, 119, 120} <= lengths
    for v in load_vectors():
        assert v['digest'] == hashlib.md5(v['message']).digest()


def _single_block_overflow_md5(message):
    # padding that only keeps the length field in the terminator's block when
    # strictly fewer than 64 bytes are used, so 55- and 119-byte messages get a spare block
    n = len(message)
    n_blocks = (n + 9) // 64 + 1
    padded = message + b'\x80' + bytes(n_blocks * 64 - n - 9) + (8 * n).to_bytes(8, 'little')
    return md5_blocks(bytes_to_words(padded[i : i + 64]) for i in range(0, len(padded), 64))


def test_gate_rejects_off_by_one_padding():
    assert _single_block_overflow_md5(b'abc') == md5(b'abc')

    mismatches = check(_single_block_overflow_md5)
    assert mismatches
    assert {len(m['message']) for m in mismatches} == {55, 119}
