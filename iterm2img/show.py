import click
import logging
import os

from iterm2img.encoder import from_bytes, parse_length
from iterm2img.io import IMAGE_FORMATS, read_bytes, resolve_files
from iterm2img.utils.config import get_config


def parse_length_option(ctx, param, value):
    try:
        return parse_length(value)
    except ValueError as e:
        raise click.BadParameter(str(e))


def is_size(value):
    return (
        isinstance(value, int) and not isinstance(value, bool) and value >= 0
    )


def set_verbosity(debug):
    logging.basicConfig(format='%(levelname)s %(name)s: %(message)s')
    logging.getLogger('iterm2img').setLevel(
        logging.DEBUG if debug else logging.WARNING
    )


def apply_options(image, options, path=None):
    """Applies the `image` section of a config to a `PendingImage`.

    Args:
        image: The `PendingImage` to update.
        options: `EasyDict` with the keys of the `image` config section.
        path: Path the payload was read from, used when
            `options.use_filename` is set.

    Returns:
        The updated `PendingImage`.
    """
    if options.get('name') is not None:
        image = image.name(str(options.name))
    elif options.get('use_filename') and path:
        image = image.name(os.path.basename(path))

    width = parse_length(options.get('width'))
    if width is not None:
        image = image.width_spec(width)

    height = parse_length(options.get('height'))
    if height is not None:
        image = image.height_spec(height)

    if options.get('preserve_aspect_ratio') is not None:
        image = image.preserve_aspect_ratio(options.preserve_aspect_ratio)

    if options.get('inline') is not None:
        image = image.inline(options.inline)

    return image


def encode_file(path, options, max_size=None):
    """Reads the file at `path` and returns its escape sequence."""
    payload = read_bytes(path, max_size=max_size)
    return apply_options(from_bytes(payload), options, path=path).build()


@click.command(help='Print images inline in the terminal.')
@click.argument('path-or-dir', nargs=-1, required=True)
@click.option('config_files', '--config', '-c', multiple=True, help='Config to use.')  # noqa
@click.option('override_params', '--override', '-o', multiple=True, help='Override config params, e.g. `image.width=10px`.')  # noqa
@click.option('--name', help='Filename to send along with the image.')
@click.option('--use-filename/--no-use-filename', default=None, help='Send the basename of each file as its name.')  # noqa
@click.option('--width', callback=parse_length_option, help='Width as cells (10), pixels (10px), percentage (50%) or auto.')  # noqa
@click.option('--height', callback=parse_length_option, help='Height as cells (10), pixels (10px), percentage (50%) or auto.')  # noqa
@click.option('--preserve-aspect-ratio/--no-preserve-aspect-ratio', default=None, help='Whether the terminal keeps the aspect ratio when scaling.')  # noqa
@click.option('--inline/--no-inline', default=None, help='Display the image instead of offering it as a download.')  # noqa
@click.option('--max-size', type=click.IntRange(min=0), help='Downscale images larger than this many pixels on either side.')  # noqa
@click.option('output_path', '--output', '-f', default='-', help='Output file for the escape sequences.')  # noqa
@click.option('--debug', is_flag=True, help='Set debug level logging.')
def show(path_or_dir, config_files, override_params, name, use_filename,
         width, height, preserve_aspect_ratio, inline, max_size, output_path,
         debug):
    """Encode files as iTerm2 inline images.

    Options given on the command line take precedence over the ones in
    `config_files` and `override_params`.
    """
    set_verbosity(debug)

    try:
        config = get_config(config_files, override_params)
    except ValueError as e:
        raise click.BadParameter(str(e))

    options = config.image
    cli_options = {
        'name': name,
        'use_filename': use_filename,
        'width': width,
        'height': height,
        'preserve_aspect_ratio': preserve_aspect_ratio,
        'inline': inline,
    }
    for key, value in cli_options.items():
        if value is not None:
            options[key] = value

    try:
        options.width = parse_length(options.get('width'))
        options.height = parse_length(options.get('height'))
    except ValueError as e:
        raise click.BadParameter(str(e))

    if max_size is None:
        max_size = config.resize.max_size
        if max_size is not None and not is_size(max_size):
            raise click.BadParameter(
                'Invalid max size "{}"'.format(max_size),
                param_hint='resize.max_size'
            )

    # Process the input and get the actual files to read.
    files = resolve_files(path_or_dir)
    if not files:
        click.echo(
            'No files found. Accepted formats for directories are: {}.'.format(
                ', '.join(IMAGE_FORMATS)
            )
        )
        return

    failed = []
    with click.open_file(output_path, 'w') as output:
        for path in files:
            try:
                sequence = encode_file(path, options, max_size=max_size)
            except (OSError, ValueError) as e:
                click.echo('Error while processing {}: {}'.format(path, e),
                           err=True)
                failed.append(path)
                continue

            output.write(sequence + '\n')

    if failed:
        raise click.ClickException(
            '{} of {} files could not be encoded.'.format(
                len(failed), len(files)
            )
        )
