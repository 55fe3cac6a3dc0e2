from os import environ, path


# manage root directories
def _project_root() -> str:
    _root = path.join(__file__, path.pardir)
    return path.abspath(_root)


ROOT = _project_root()
DATA_ROOT = environ.get('MMBOT_DATA', f'{_project_root()}/data/')

CONFIG_FN = 'config.yml'
CONFIG_F = environ.get('MMBOT_CONFIG', path.join(ROOT, CONFIG_FN))

LOG_FN = 'mmbot.log'
VERSION = '0.1.0'
