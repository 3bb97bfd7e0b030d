'''
Conformance checks against known MD5 vectors.

Any reimplementation of the padding / compression / chaining rules (the lane
engine, a device kernel wrapped in a Python callable, ...) has to reproduce
these digests exactly before its results are trusted. A divergence gives no
error signal on its own, only wrong digests.
'''

import hashlib
from pathlib import Path
from typing import Callable

from md5engine.fileio import FileIO
from md5engine.formatter import from_hex, to_hex
from md5engine.lanes import md5_lanes
from md5engine.md5 import md5

GR = '\033[32m'     # green
RD = '\033[31m'     # red
X  = '\033[0m'      # reset

DEFAULT_VECTORS = FileIO.PACKAGE / 'vectors.yaml'


def _vector_message(v: dict) -> bytes:
    if ('message' in v) == ('hex' in v):
        raise ValueError(f"vector needs exactly one of 'message' or 'hex', got {sorted(v)}")

    key = 'message' if 'message' in v else 'hex'
    value = v[key]
    # unquoted YAML scalars such as 0123 or yes arrive as int / bool
    if not isinstance(value, str):
        raise TypeError(f"vector '{key}' must be a string, got {type(value).__name__}: {value!r}")

    return value.encode('utf-8') if key == 'message' else bytes.fromhex(value)


def load_vectors(path: str | Path | None = None) -> list[dict]:
    '''
    Load known-answer vectors.

    Each entry carries the message either as UTF-8 text (`message`) or as hex
    (`hex`, for binary input), and optionally its `digest`. Entries without a
    digest take the one computed by hashlib, an implementation independent of
    this package; the bundled suite uses that for its padding boundary cases.

    Parameters:
    -----------
    path : str | Path | None
        YAML file with a list of entries. Defaults to the bundled suite.

    Returns:
    --------
    list[dict]
        Entries with `message` as bytes and `digest` as 16 bytes.
    '''
    data = FileIO.load_yaml(path or DEFAULT_VECTORS)
    if not isinstance(data, list):
        raise TypeError(f"Expected list of vectors, got {type(data)}")

    vectors = []
    for v in data:
        if not isinstance(v, dict):
            raise TypeError(f"Expected mapping per vector, got {type(v)}")

        message = _vector_message(v)
        if 'digest' not in v:
            digest = hashlib.md5(message).digest()
        elif isinstance(v['digest'], str):
            digest = from_hex(v['digest'])
        else:
            raise TypeError(f"vector 'digest' must be a string, got {type(v['digest']).__name__}")

        vectors.append({'message': message, 'digest': digest})

    return vectors


def check(impl: Callable[[bytes], bytes], vectors: list[dict] | None = None) -> list[dict]:
    '''
    Run an implementation over the vectors and collect every disagreement.

    Parameters:
    -----------
    impl : Callable[[bytes], bytes]
        Maps a message to its 16-byte digest.

    vectors : list[dict] | None
        As returned by load_vectors(); defaults to the bundled suite.

    Returns:
    --------
    list[dict]
        {message, expected, actual} per mismatch, digests as hex. Empty when conformant.
    '''
    vectors = load_vectors() if vectors is None else vectors

    mismatches = []
    for v in vectors:
        actual = bytes(impl(v['message']))
        if actual != v['digest']:
            mismatches.append({
                'message': v['message'],
                'expected': to_hex(v['digest']),
                'actual': actual.hex(),
            })
    return mismatches


def check_lanes(vectors: list[dict] | None = None) -> list[dict]:
    '''
    Conformance of the lane engine: the whole suite is hashed as one batch,
    then each row is compared to its expected digest.
    '''
    vectors = load_vectors() if vectors is None else vectors
    rows = md5_lanes([v['message'] for v in vectors])
    by_message = {v['message']: row.tobytes() for v, row in zip(vectors, rows)}
    return check(by_message.__getitem__, vectors)


def report(mismatches: list[dict], name: str) -> bool:
    if not mismatches:
        print(f' {GR}[pass]{X} {name}')
        return True

    print(f' {RD}[fail]{X} {name}: {len(mismatches)} mismatch(es)')
    for m in mismatches:
        print(f'   {m["message"]!r}: expected {m["expected"]}, got {m["actual"]}')
    return False


if __name__ == '__main__':
    ok = report(check(md5), 'md5')
    ok = report(check_lanes(), 'md5_lanes') and ok
    raise SystemExit(0 if ok else 1)
