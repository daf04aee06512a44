"""Simple command line utility called `iterm2img`.

Its subcommands are:
    show: Print images inline in the terminal.
    dump-config: Print the effective configuration.
"""

import click

from iterm2img.show import show
from iterm2img.utils.config import dump_config, get_config


CONTEXT_SETTINGS = dict(help_option_names=['-h', '--help'])


@click.group(context_settings=CONTEXT_SETTINGS)
def cli():
    pass


@click.command('dump-config', help='Print the effective configuration.')
@click.option('config_files', '--config', '-c', multiple=True, help='Config to use.')  # noqa
@click.option('override_params', '--override', '-o', multiple=True, help='Override config params.')  # noqa
def dump(config_files, override_params):
    try:
        config = get_config(config_files, override_params)
    except ValueError as e:
        raise click.BadParameter(str(e))
    click.echo(dump_config(config), nl=False)


cli.add_command(show)
cli.add_command(dump)
