import json
import yaml
from pathlib import Path

class FileIO:
    # global root directory one level above the package
    ROOT = Path(__file__).resolve().parent.parent

    # bundled data files (vectors.yaml) live next to the modules
    PACKAGE = Path(__file__).resolve().parent

    @staticmethod
    def resolve(path: str | Path) -> Path:
        '''
        prepend ROOT to the given relative path; absolute paths pass through
        '''
        return FileIO.ROOT / Path(path)

    # yaml
    @staticmethod
    def load_yaml(path: str | Path) -> dict | list:
        p = FileIO.resolve(path)

        with p.open('r', encoding = 'utf-8', errors = 'ignore') as f:
            data = yaml.safe_load(f)

        return data

    # json
    @staticmethod
    def load_json(path: str | Path) -> dict | list:
        p = FileIO.resolve(path)

        with p.open('r', encoding = 'utf-8') as f:
            data =  json.load(f)

        return data

    @staticmethod
    def save_json(obj: dict | list, path: str | Path) -> None:
        p = FileIO.resolve(path)
        p.parent.mkdir(parents = True, exist_ok = True)

        with p.open('w', encoding = 'utf-8') as f:
            json.dump(obj, f, indent = 2, ensure_ascii = False)
        print(f'saved {type(obj)} to {p}')

    # text
    @staticmethod
    def load_txt(path: str | Path) -> list[str]:
        p = FileIO.resolve(path)

        with p.open('r', encoding = 'utf-8', errors = 'ignore') as f:
            lines =  [line.rstrip('\n') for line in f]

        return lines

    @staticmethod
    def load_words(path: str | Path) -> list[str]:
        '''
        Load a word list from `.yaml`/`.yml` (a sequence, or a mapping with a
        top-level "passwords" list), `.json` (a list) or `.txt` (one per line).
        '''
        p = FileIO.resolve(path)
        suffix = p.suffix.lower()

        if suffix in ('.yaml', '.yml'):
            data = FileIO.load_yaml(p)
        elif suffix == '.json':
            data = FileIO.load_json(p)
        elif suffix == '.txt':
            return [line for line in FileIO.load_txt(p) if line]
        else:
            raise ValueError(f"load_words expects YAML, JSON or TXT input, got '{suffix}'")

        if isinstance(data, dict):
            data = data.get('passwords', [])
        if not isinstance(data, list):
            raise TypeError(f"Expected list of words, got {type(data)}")

        return [str(w) for w in data]
