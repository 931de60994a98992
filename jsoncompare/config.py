import os

from jupyter_core.paths import jupyter_config_path

from traitlets import Unicode, Enum, Integer, Float, List, HasTraits
from traitlets.config.loader import JSONFileConfigLoader, ConfigFileNotFound

from .diffing.config import DEFAULT_IDENTITY_FIELDS, DEFAULT_MAX_DEPTH, DEFAULT_MAX_NODES
from .formatting import DISPLAY_CAP, EXPORT_CAP


class JsonCompareConfigurable(HasTraits):

    def configured_traits(self, cls):
        traits = cls.class_own_traits(config=True)
        c = {}
        for name, _ in traits.items():
            c[name] = getattr(self, name)
        return c


_config_cache = {}
def config_instance(cls):
    if cls in _config_cache:
        return _config_cache[cls]
    instance = _config_cache[cls] = cls()
    return instance


def _load_config_files(basefilename, path=None):
    """Load config files (json) by filename and path.

    yield each config object in turn.
    """

    if not isinstance(path, list):
        path = [path]
    for path in path[::-1]:
        # path list is in descending priority order, so load files backwards:
        loader = JSONFileConfigLoader(basefilename+'.json', path=path)
        config = None
        try:
            config = loader.load_config()
        except ConfigFileNotFound:
            pass
        if config:
            yield config


def recursive_update(target, new, include_none):
    """Recursively update one dictionary using another.

    None values will delete their keys.
    """
    for k, v in new.items():
        if isinstance(v, dict):
            if k not in target:
                target[k] = {}
            recursive_update(target[k], v, include_none)
            if not include_none and not target[k]:
                # Prune empty subdicts
                del target[k]

        elif not include_none and v is None:
            target.pop(k, None)

        else:
            target[k] = v


def build_config(entrypoint, include_none=False):
    if entrypoint not in entrypoint_configurables:
        raise ValueError('Config for entrypoint name %r is not defined! Accepted values are %r.' % (
            entrypoint, list(entrypoint_configurables.keys())
        ))

    # Get config from disk:
    disk_config = {}
    path = jupyter_config_path()
    path.insert(0, os.getcwd())
    for c in _load_config_files('jsoncompare_config', path=path):
        recursive_update(disk_config, c, include_none)

    config = {}
    configurable = entrypoint_configurables[entrypoint]
    for c in reversed(configurable.mro()):
        if issubclass(c, JsonCompareConfigurable):
            recursive_update(config, config_instance(c).configured_traits(c), include_none)
            if (c.__name__ in disk_config):
                recursive_update(config, disk_config[c.__name__], include_none)

    return config


def get_defaults_for_argparse(entrypoint):
    return build_config(entrypoint)


class Global(JsonCompareConfigurable):

    log_level = Enum(
        ('DEBUG', 'INFO', 'WARN', 'ERROR', 'CRITICAL'),
        'INFO',
        help="Set the log level by name.",
    ).tag(config=True)


class Web(JsonCompareConfigurable):

    port = Integer(
        0,
        help="specify the port you want the server to run on. Default is 0 (random).",
    ).tag(config=True)

    ip = Unicode(
        '127.0.0.1',
        help="specify the interface to listen to for the web server. "
        "NOTE: Setting this to anything other than 127.0.0.1/localhost "
        "might comprimise the security of your computer. Use with care!",
    ).tag(config=True)

    base_url = Unicode(
        '/', help="The base URL prefix under which to run the web app",
    ).tag(config=True)

    browser = Unicode(
        None,
        allow_none=True,
        help="specify the browser to use, to override the system default.",
    ).tag(config=True)

    workdirectory = Unicode(
        default_value=os.path.abspath(os.path.curdir),
        help="specify the working directory you want "
             "the server to run from. Default is the "
             "actual cwd at program start.",
    ).tag(config=True)


class _Diffing(JsonCompareConfigurable):

    identity_fields = List(
        Unicode(),
        default_value=list(DEFAULT_IDENTITY_FIELDS),
        minlen=1,
        help="fields identifying the items of an array, in order of preference.",
    ).tag(config=True)

    max_depth = Integer(
        DEFAULT_MAX_DEPTH,
        help="maximum nesting depth of compared documents.",
    ).tag(config=True)

    max_nodes = Integer(
        DEFAULT_MAX_NODES,
        help="maximum number of values in each compared document.",
    ).tag(config=True)

    timeout = Float(
        None,
        allow_none=True,
        help="give up a comparison after this many seconds.",
    ).tag(config=True)


class Report(JsonCompareConfigurable):

    display_cap = Integer(
        DISPLAY_CAP,
        help="number of characters of a value shown before it is truncated.",
    ).tag(config=True)

    export_cap = Integer(
        EXPORT_CAP,
        help="number of characters of a value written to CSV exports.",
    ).tag(config=True)


class Diff(Global, _Diffing, Report):
    pass


class JsonDiff(Diff):
    pass

class JsonDiffWeb(Web, Diff):
    pass

class JsonDiffExport(Diff):
    pass

class Server(Web, Diff):

    port = Integer(
        8888,
        help="specify the port you want the server to run on. Default is 8888.",
    ).tag(config=True)


entrypoint_configurables = {
    'jsondiff': JsonDiff,
    'jsondiff-web': JsonDiffWeb,
    'jsondiff-export': JsonDiffExport,
    'server': Server,
}
