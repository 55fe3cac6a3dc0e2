from dataclasses import dataclass
from pathlib import Path
from shutil import rmtree
from tempfile import mkdtemp
import unittest
from unittest.mock import patch, PropertyMock
from yaml import safe_dump, safe_load

from primitives import StoredObject


@dataclass
class MockRecord:
    name: str
    value: float

    def to_dict(self) -> dict:
        return {'name': self.name, 'value': self.value}

    @classmethod
    def from_dict(cls, data: dict) -> 'MockRecord':
        return cls(data['name'], data['value'])


class BaseStoredObjectTests(unittest.TestCase):
    @patch.object(StoredObject, '__abstractmethods__', set())
    def setUp(self):
        self.dir = Path(mkdtemp())
        self.object = StoredObject(root=str(self.dir))

        self.patcher = patch.object(StoredObject, '_instance_dir', new_callable=PropertyMock,
                                    return_value=Path(self.dir, 'test_object'))
        self.patcher.start()

    def tearDown(self):
        self.patcher.stop()
        rmtree(self.dir)


class StoredObjectSerialization(BaseStoredObjectTests):
    def test_instance_dir(self):
        """ Records are kept in a directory of their own under the data root. """
        self.object.save()
        self.assertEqual(Path(self.dir, 'test_object'), self.object._instance_dir)
        self.assertTrue(Path(self.dir, 'test_object', 'literals.yml').exists())

    def test_save(self):
        self.object.records = [MockRecord('a', 1.0)]
        self.object.sequences = {'records': MockRecord}

        self.object.save()
        _files = [i.name for i in self.object._instance_dir.iterdir()]

        self.assertCountEqual(('literals.yml', 'records.yml'), _files)

    def test_save_literals(self):
        """ Only str, int, float and bool attributes are stored as literals. """
        self.object.name = 'test'
        self.object.count = 3
        self.object.rate = 0.5
        self.object.flag = True
        self.object.client = object()

        self.object.save()
        with open(Path(self.object._instance_dir, 'literals.yml'), 'r') as f:
            literals: dict = safe_load(f)

        for k in ('name', 'count', 'rate', 'flag'):
            self.assertEqual(getattr(self.object, k), literals[k])
        self.assertNotIn('client', literals)

    def test_save_leaves_no_temporary_files(self):
        self.object.save()
        self.object.save()

        _files = [i.name for i in self.object._instance_dir.iterdir()]
        self.assertFalse([i for i in _files if i.endswith('.tmp')])

    def test_load_missing(self):
        """ Nothing stored is not an error. """
        self.assertFalse(self.object.load())

    def test_load_invalid(self):
        """ Test when an attribute that isn't part of instance attributes tries to get added via
        literal storage.
        """
        self.object.save()
        _fn = Path(self.object._instance_dir, 'literals.yml')
        with open(_fn, 'r') as f:
            literals: dict = safe_load(f)

        self.assertIsInstance(literals, dict)
        literals['test'] = 'test'
        with open(_fn, 'w') as f:
            safe_dump(literals, f)

        with self.assertRaises(AssertionError):
            self.object.load()

    def test_load(self):
        self.object.records = []
        self.object.sequences = {'records': MockRecord}
        self.object.flag = False

        self.object.save()
        with open(Path(self.object._instance_dir, 'records.yml'), 'w') as f:
            safe_dump([{'name': 'b', 'value': 2.5}], f)

        _fn = Path(self.object._instance_dir, 'literals.yml')
        with open(_fn, 'r') as f:
            literals: dict = safe_load(f)
        literals['flag'] = True
        with open(_fn, 'w') as f:
            safe_dump(literals, f)

        self.assertTrue(self.object.load())
        self.assertTrue(self.object.flag)
        self.assertEqual([MockRecord('b', 2.5)], self.object.records)

    def test_save_exclude(self):
        """ Excluded attributes are never serialized. """
        self.object.records = [MockRecord('a', 1.0)]
        self.object.sequences = {'records': MockRecord}
        self.object.excluded = 'excluded'
        self.object.exclude = ['excluded', 'records']

        self.object.save()
        _files = [i.name for i in self.object._instance_dir.iterdir()]
        with open(Path(self.object._instance_dir, 'literals.yml'), 'r') as f:
            literals: dict = safe_load(f)

        self.assertNotIn('records.yml', _files)
        self.assertNotIn('excluded', literals)


if __name__ == '__main__':
    unittest.main()
