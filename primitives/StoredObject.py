from abc import ABC, abstractmethod
import logging
import os
from pathlib import Path
from typing import Any, ClassVar, Dict, Iterable, List
import yaml

from misc import DATA_ROOT

_FN_EXT = ".yml"
_LITERALS_FN = f"literals{_FN_EXT}"
_LITERAL_TYPES = (str, int, float, bool)

logger = logging.getLogger(__name__)


def _write_atomic(fn: Path, data: Any) -> None:
    """ Dump `data` to `fn` through a temporary file so a crash never leaves a torn record. """
    tmp = fn.with_name(f"{fn.name}.tmp")
    with open(tmp, 'w') as f:
        yaml.safe_dump(data, f, sort_keys=False)
        f.flush()
        os.fsync(f.fileno())
    os.replace(tmp, fn)


class StoredObject(ABC):
    """ Persists instance attributes to a per-instance directory under `root`.

    Literal attributes (str, int, float, bool) are stored together in `literals.yml`. Attributes named in
    `sequences` are lists of records, each stored in its own `<attr>.yml` file. Record classes must provide
    `to_dict()` and a `from_dict()` classmethod. Anything else (clients, locks, ...) is never stored.

    Fields:
        root:
            Directory holding one sub-directory per instance.
        exclude:
            Attribute names that are never stored nor loaded.
        sequences:
            Mapping of attribute name to record class.
    """
    root: ClassVar[str] = DATA_ROOT
    exclude: Iterable[str]
    sequences: ClassVar[Dict[str, type]] = {}
    __name__ = 'StoredObject'

    def __init__(self, *args, root: str = None, exclude: Iterable[str] = None, **kwargs):
        super().__init__()

        self.exclude: Iterable[str] = exclude
        if root is not None:
            self.root = root

    @property
    @abstractmethod
    def _instance_dir(self) -> Path:
        pass

    @staticmethod
    def _create_dir(_dir: Path) -> None:
        _dir.mkdir(parents=True, exist_ok=True)

    def save(self) -> None:
        logger.debug("Beginning save for %s", self.__name__)

        # aggregate attributes
        _literals = {}
        _sequence_keys: List[str] = []
        for k, v in self.__dict__.items():
            if self.exclude and k in self.exclude:
                continue
            elif type(v) in _LITERAL_TYPES:
                _literals[k] = v
            elif k in self.sequences:
                _sequence_keys.append(k)

        _dir = self._instance_dir
        self._create_dir(_dir)

        # sequences first, so that literals never describe records that were not written
        for attr in _sequence_keys:
            _write_atomic(Path(_dir, f"{attr}{_FN_EXT}"), [i.to_dict() for i in getattr(self, attr)])

        _write_atomic(Path(_dir, _LITERALS_FN), _literals)

        logger.debug("Finished saving %s", self.__name__)

    def load(self) -> bool:
        """ Load stored attributes and sequence data from instance directory onto memory.

        Notes
            All matching data on memory is overwritten.

        Raises:
            AssertionError: when stored data does not match the attributes of this instance.

        Returns:
            False when nothing has been stored for this instance yet, otherwise True.
        """
        _dir = self._instance_dir
        _literals_fn = Path(_dir, _LITERALS_FN)
        if not _literals_fn.exists():
            return False

        logger.debug("Loading data for %s", self.__name__)

        # literals should be verified (ie: not be a function)
        with open(_literals_fn, 'r') as f:
            _literals = yaml.safe_load(f)
        assert isinstance(_literals, dict)
        for k, v in _literals.items():
            if self.exclude:
                assert k not in self.exclude
            assert hasattr(self, k)
            assert type(v) in _LITERAL_TYPES

            setattr(self, k, v)

        for k, _cls in self.sequences.items():
            if self.exclude and k in self.exclude:
                continue
            try:
                with open(Path(_dir, f"{k}{_FN_EXT}"), 'r') as f:
                    container = yaml.safe_load(f)
            except FileNotFoundError:
                continue
            assert isinstance(container, list)
            setattr(self, k, [_cls.from_dict(i) for i in container])

        logger.debug("Load complete for %s", self.__name__)
        return True
