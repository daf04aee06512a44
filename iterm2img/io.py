import click
import io
import logging
import os

from PIL import Image

IMAGE_FORMATS = ['jpg', 'jpeg', 'png', 'gif', 'bmp', 'tiff', 'webp']

logger = logging.getLogger('iterm2img.io')


def is_image_file(filename):
    extension = filename.split('.')[-1].lower()
    return extension in IMAGE_FORMATS


def resolve_files(path_or_dir):
    """Returns the file paths for `path_or_dir`.

    Args:
        path_or_dir: String or tuple of strings for the paths or directories
            to read. Directories expand to the image files within, explicit
            files are kept whatever their extension.

    Returns:
        List of strings with the full path for each file.
    """
    if not isinstance(path_or_dir, tuple):
        path_or_dir = (path_or_dir,)

    paths = []
    for entry in path_or_dir:
        entry = os.path.expanduser(entry)
        if os.path.isdir(entry):
            paths.extend([
                os.path.join(entry, f)
                for f in sorted(os.listdir(entry))
                if is_image_file(f)
                and os.path.isfile(os.path.join(entry, f))
            ])
        elif not os.path.exists(entry):
            click.echo('Input {} not found, skipping.'.format(entry), err=True)
        else:
            paths.append(entry)

    return paths


def read_bytes(path, max_size=None):
    """Reads the file located at `path`.

    Arguments:
        path (str): Path to a file in the filesystem.
        max_size (int): When given, images larger than `max_size` pixels on
            either side are downscaled to fit, keeping their aspect ratio and
            format.

    Returns:
        `bytes` with the (possibly resized) file contents.
    """
    full_path = os.path.expanduser(path)
    with open(full_path, 'rb') as f:
        data = f.read()

    if not max_size:
        return data

    image = Image.open(io.BytesIO(data))
    if image.width <= max_size and image.height <= max_size:
        return data

    image_format = image.format or 'PNG'
    original_size = image.size
    image.thumbnail((max_size, max_size))
    logger.debug('Resized {} from {} to {}'.format(
        path, original_size, image.size
    ))

    output = io.BytesIO()
    image.save(output, format=image_format)
    return output.getvalue()
