"""iterm2img home (~/.iterm2img) management utilities."""
import os


DEFAULT_ITERM2IMG_HOME = os.path.expanduser('~/.iterm2img')


def get_home():
    """Returns iterm2img's homedir."""
    # Get the home directory (the default one or the overridden).
    return os.path.abspath(
        os.environ.get('ITERM2IMG_HOME', DEFAULT_ITERM2IMG_HOME)
    )


def get_user_config_path():
    """Returns the path of the user's config file, which may not exist."""
    return os.path.join(get_home(), 'config.yml')
