from pathlib import Path
from typing import Iterable

from tqdm import tqdm

from md5engine.fileio import FileIO
from md5engine.formatter import from_hex
from md5engine.md5 import md5_hex


def hash_md5(s: str) -> str:
    '''
    Hash string with MD5.

    Parameters:
    -----------
    s : str
        Plaintext string, encoded as UTF-8.

    Returns:
    --------
    str
        MD5 hash as a 32-character hexadecimal string.
    '''
    return md5_hex(s.encode('utf-8'))


def build_table(words: Iterable[str], *, progress: bool = True) -> dict[str, str]:
    '''
    Map the hex digest of every word to the word itself.

    Parameters:
    -----------
    words : Iterable[str]
        Plaintext words. Later duplicates overwrite earlier ones.

    progress : bool, default True
        Show a tqdm progress bar.

    Returns:
    --------
    dict[str, str]
        {hash: word}
    '''
    return {hash_md5(w): w for w in tqdm(words, desc = ' hashing', disable = not progress)}


def lookup(table: dict[str, str], target: str) -> str | None:
    # normalise case and whitespace; malformed targets raise ValueError
    return table.get(from_hex(target).hex())


def main(p: str | Path, out: str | Path) -> None:
    '''
    Load a word list, hash every word with MD5, and save as a JSON mapping.

    Parameters:
    -----------
    p : str | Path
        Path to the word list (YAML, JSON or TXT).

    out : str | Path
        Path where the JSON mapping {hash: word} will be saved.
    '''
    words = FileIO.load_words(p)

    hashed = build_table(words)
    FileIO.save_json(hashed, out)

    print(f'saved {len(hashed)} entries to {out}')

if __name__ == '__main__':
    in_file = 'data/cleaned/yaml/1mil_pw_cleaned.yaml'
    out_file = 'data/structured/1mil_pw_structured.json'
    main(in_file, out_file)
