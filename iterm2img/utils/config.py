import logging
import os.path
import yaml

from easydict import EasyDict

from iterm2img.utils.homedir import get_user_config_path


BASE_CONFIG_PATH = os.path.join(
    os.path.dirname(os.path.dirname(os.path.abspath(__file__))),
    'base_config.yml'
)

logger = logging.getLogger('iterm2img.config')


def get_config(config_files=None, override_params=None):
    """Returns the effective configuration.

    Layers, from lowest to highest precedence: the bundled base config, the
    user's config file (if present), `config_files` and `override_params`.
    """
    config = get_base_config()

    filenames = []
    user_config_path = get_user_config_path()
    if os.path.isfile(user_config_path):
        filenames.append(user_config_path)
    if config_files:
        filenames.extend(config_files)

    custom_config = load_config_files(filenames) if filenames else None
    return get_merged_config(config, custom_config, override_params)


def get_base_config():
    return load_config_files([BASE_CONFIG_PATH], warn_overwrite=False)


def load_config_files(filename_or_filenames, warn_overwrite=True):
    if isinstance(filename_or_filenames, (list, tuple)):
        filenames = filename_or_filenames
    else:
        filenames = [filename_or_filenames]

    config = EasyDict({})
    for filename in filenames:
        with open(filename) as f:
            new_config = EasyDict(yaml.safe_load(f) or {})
        config = merge_into(
            new_config,
            config, overwrite=True, warn_overwrite=warn_overwrite
        )
    return config


def to_dict(config):
    if type(config) is list:
        return [to_dict(c) for c in config]
    elif type(config) is EasyDict:
        return dict([(k, to_dict(v)) for k, v in config.items()])
    else:
        return config


def dump_config(config):
    config = to_dict(config)
    return yaml.dump(config, default_flow_style=False)


def is_length(value):
    return isinstance(value, (int, str)) and not isinstance(value, bool)


def types_compatible(new_config_value, base_config_value):
    """
    Checks that config value types are compatible.
    """
    # Allow to overwrite None values (explicit or just missing)
    if base_config_value is None:
        return True
    # Allow overwrite all None and False values.
    if new_config_value is None or new_config_value is False:
        return True
    # Lengths are written both as plain numbers and as strings (`10px`).
    if is_length(new_config_value) and is_length(base_config_value):
        return True

    return isinstance(new_config_value, type(base_config_value))


def merge_into(new_config, base_config, overwrite=False, warn_overwrite=False):
    """Merge one easy dict into another.

    If `overwrite` is set to true, conflicting keys will get their values from
    new_config. Else, the value will be taken from base_config.
    """
    if not isinstance(new_config, dict):
        return base_config

    for key, value in new_config.items():
        base_value = base_config.get(key)
        if isinstance(base_value, dict) and not isinstance(value, dict):
            # An empty section keeps the values already in place.
            if value is None:
                continue
            raise ValueError(
                'Key "{}" must be a section, got "{}"'.format(key, value))

        # Since we already have the values of base_config we check against them
        if not types_compatible(value, base_config.get(key)):
            raise ValueError(
                'Incorrect type "{}" for key "{}". Must be "{}"'.format(
                    type(value), key, type(base_config.get(key))))

        # Recursively merge dicts
        if isinstance(value, dict):
            base_config[key] = merge_into(
                new_config[key], base_config.get(key) or EasyDict({}),
                overwrite=overwrite, warn_overwrite=warn_overwrite
            )
        else:
            if base_config.get(key) is None:
                base_config[key] = value
            elif overwrite:
                base_config[key] = value
                if warn_overwrite:
                    logger.warning('Overwrote key "{}"'.format(key))

    return base_config


def parse_override(override_options):
    if not override_options:
        return {}

    override_dict = {}
    for option in override_options:
        key_value = option.split('=')
        if len(key_value) != 2:
            raise ValueError('Invalid override option "{}"'.format(option))
        key, value = key_value
        nested_keys = key.split('.')

        local_override_dict = override_dict
        for nested_key in nested_keys[:-1]:
            if nested_key not in local_override_dict:
                local_override_dict[nested_key] = {}
            local_override_dict = local_override_dict[nested_key]

        local_override_dict[nested_keys[-1]] = parse_config_value(value)

    return override_dict


def parse_config_value(value):
    """
    Try to parse the config value to boolean, integer, float or string.
    We assume all values are strings.
    """
    if value.lower() == 'none':
        return None
    elif value.lower() == 'true':
        return True
    elif value.lower() == 'false':
        return False

    try:
        return int(value)
    except ValueError:
        pass

    try:
        return float(value)
    except ValueError:
        pass

    return value


def override_config_params(config, params):
    """Overrides `config` with `params` (a list of `key=value` strings)."""
    override_config = EasyDict(parse_override(params))
    return merge_into(override_config, config, overwrite=True)


def get_merged_config(base_config, custom_config, override_params):
    config = EasyDict(base_config.copy())

    if custom_config:
        # If we have a custom config file overwriting default settings
        # then we merge those values to the base_config.
        config = merge_into(custom_config, config, overwrite=True)
    if override_params:
        config = override_config_params(config, override_params)

    return config
