
import os

from jupyter_core.paths import jupyter_config_path

from traitlets import Enum, Bool, HasTraits, List, Unicode, TraitError
from traitlets.config.loader import JSONFileConfigLoader, ConfigFileNotFound

from .diff_format import DiffFlags, CompatibilityFlags


class JsonDeltaConfigurable(HasTraits):

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
    """Merge class defaults and config files into the settings of an entrypoint.

    Files named jsondelta_config.json are looked up in the current
    directory and the jupyter config path, the current directory
    taking precedence. Sections are keyed by configurable class name.
    """
    if entrypoint not in entrypoint_configurables:
        raise ValueError('Config for entrypoint name %r is not defined! Accepted values are %r.' % (
            entrypoint, list(entrypoint_configurables.keys())
        ))

    # Get config from disk:
    disk_config = {}
    path = jupyter_config_path()
    path.insert(0, os.getcwd())
    for c in _load_config_files('jsondelta_config', path=path):
        recursive_update(disk_config, c, include_none)

    config = {}
    configurable = entrypoint_configurables[entrypoint]
    for c in reversed(configurable.mro()):
        if issubclass(c, JsonDeltaConfigurable):
            recursive_update(config, config_instance(c).configured_traits(c), include_none)
            if (c.__name__ in disk_config):
                recursive_update(config, disk_config[c.__name__], include_none)

    return config


def get_defaults_for_argparse(entrypoint):
    return build_config(entrypoint)


class Global(JsonDeltaConfigurable):

    log_level = Enum(
        ('DEBUG', 'INFO', 'WARN', 'ERROR', 'CRITICAL'),
        'INFO',
        help="Set the log level by name.",
    ).tag(config=True)


class CompositePaths(List):

    def validate_elements(self, obj, value):
        value = super(CompositePaths, self).validate_elements(obj, value)
        for p in value:
            if not p.startswith('/'):
                raise TraitError('composite paths need to start with `/`')
        return value


class _Diffing(Global):

    omit_value_on_remove = Bool(
        True,
        help="leave the removed value out of remove operations.",
    ).tag(config=True)

    omit_move_operation = Bool(
        False,
        help="never fold remove/add pairs into move operations.",
    ).tag(config=True)

    omit_copy_operation = Bool(
        False,
        help="never turn additions of unchanged values into copy operations.",
    ).tag(config=True)

    omit_composite_array = Bool(
        False,
        help="report any change inside an array as a replace of the whole array.",
    ).tag(config=True)

    add_original_value_on_replace = Bool(
        False,
        help="include the replaced value as 'fromValue' in replace operations.",
    ).tag(config=True)

    emit_test_operations = Bool(
        False,
        help="precede removals and replacements with a test of the old value.",
    ).tag(config=True)

    composite_paths = CompositePaths(
        Unicode(),
        default_value=[],
        help="pointers to subtrees that are replaced as a whole when changed.",
    ).tag(config=True)


class _Patching(Global):

    missing_values_as_nulls = Bool(
        False,
        help="treat a missing 'value' field of add/replace/test as null.",
    ).tag(config=True)

    remove_nonexistent_array_element = Bool(
        False,
        help="ignore removals of array indices past the end of the array.",
    ).tag(config=True)

    allow_missing_target_object_on_replace = Bool(
        False,
        help="let replace create object fields that do not exist yet.",
    ).tag(config=True)


class Diff(_Diffing):
    pass


class Patch(_Patching):
    pass


class Validate(_Patching):
    pass


entrypoint_configurables = {
    'jsondelta-diff': Diff,
    'jsondelta-patch': Patch,
    'jsondelta-validate': Validate,
}


_diff_flag_names = {
    'omit_value_on_remove': DiffFlags.OMIT_VALUE_ON_REMOVE,
    'omit_move_operation': DiffFlags.OMIT_MOVE_OPERATION,
    'omit_copy_operation': DiffFlags.OMIT_COPY_OPERATION,
    'omit_composite_array': DiffFlags.OMIT_COMPOSITE_ARRAY,
    'add_original_value_on_replace': DiffFlags.ADD_ORIGINAL_VALUE_ON_REPLACE,
    'emit_test_operations': DiffFlags.EMIT_TEST_OPERATIONS,
}

_compatibility_flag_names = {
    'missing_values_as_nulls': CompatibilityFlags.MISSING_VALUES_AS_NULLS,
    'remove_nonexistent_array_element': CompatibilityFlags.REMOVE_NONEXISTENT_ARRAY_ELEMENT,
    'allow_missing_target_object_on_replace': CompatibilityFlags.ALLOW_MISSING_TARGET_OBJECT_ON_REPLACE,
}


def _collect_flags(names, empty, settings):
    flags = empty
    for name, flag in names.items():
        if getattr(settings, name, False):
            flags |= flag
    return flags


def diff_flags_from_settings(settings):
    "Build DiffFlags from an object with the _Diffing trait names as attributes."
    return _collect_flags(_diff_flag_names, DiffFlags(0), settings)


def compatibility_flags_from_settings(settings):
    "Build CompatibilityFlags from an object with the _Patching trait names as attributes."
    return _collect_flags(_compatibility_flag_names, CompatibilityFlags(0), settings)


class Namespace(object):
    def __init__(self, adict):
        self.__dict__.update(adict)
