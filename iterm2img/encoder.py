"""Builds iTerm2 inline image escape sequences.

The sequence has the form::

    ESC ]1337;File=size=N[;name=...][;width=...][;height=...]
        [;preserve_aspect_ratio=0|1][;inline=0|1]:<base64> BEL

Usage::

    from_bytes(data).name('cat.png').width(10).inline(True).build()
"""
import base64
import copy
import logging
import numbers


PREFIX = '\x1b]1337;File='
SEPARATOR = ':'
TERMINATOR = '\x07'

logger = logging.getLogger('iterm2img.encoder')


def _unsigned(value):
    # bool is an Integral too, but never a valid length.
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise TypeError(
            'Expected an unsigned integer, got {!r}'.format(value)
        )
    if value < 0:
        raise ValueError(
            'Expected an unsigned integer, got {}'.format(value)
        )
    return int(value)


class LengthSpec:
    """Size of the image along one axis."""

    def render(self):
        raise NotImplementedError()

    def _key(self):
        return ()

    def __eq__(self, other):
        return type(self) is type(other) and self._key() == other._key()

    def __hash__(self):
        return hash((type(self).__name__,) + self._key())


class _Amount(LengthSpec):
    suffix = ''

    def __init__(self, value):
        self.value = _unsigned(value)

    def render(self):
        return '{}{}'.format(self.value, self.suffix)

    def _key(self):
        return (self.value,)

    def __repr__(self):
        return '{}({})'.format(type(self).__name__, self.value)


class Cells(_Amount):
    """Size in terminal character cells."""
    suffix = ''


class Pixels(_Amount):
    """Size in pixels."""
    suffix = 'px'


class Percent(_Amount):
    """Size as a percentage of the terminal's width or height."""
    suffix = '%'


class Auto(LengthSpec):
    """Let the terminal pick the size."""

    def render(self):
        return 'auto'

    def __repr__(self):
        return 'Auto()'


def parse_length(value):
    """Turns a user supplied length into a `LengthSpec`.

    Accepts the same notation the terminal does: `10` for cells, `10px`,
    `50%` and `auto`. Integers are taken as cells.

    Args:
        value: `None`, a `LengthSpec`, an integer or a string.

    Returns:
        A `LengthSpec`, or `None` when `value` is `None`.

    Raises:
        ValueError: If `value` can't be parsed.
    """
    if value is None or isinstance(value, LengthSpec):
        return value

    if isinstance(value, numbers.Integral) and not isinstance(value, bool):
        return Cells(value)

    if not isinstance(value, str):
        raise ValueError('Invalid length "{}"'.format(value))

    text = value.strip().lower()
    if text == 'auto':
        return Auto()

    for suffix, spec_class in (('px', Pixels), ('%', Percent)):
        if text.endswith(suffix):
            number, spec = text[:-len(suffix)], spec_class
            break
    else:
        number, spec = text, Cells

    if not number.isdigit():
        raise ValueError('Invalid length "{}"'.format(value))

    return spec(int(number))


class PendingImage:
    """An image payload plus the rendering options to send along with it.

    Every setter returns a new `PendingImage`, leaving the receiver
    untouched, so calls can be chained freely. Call `build()` to get the
    escape sequence.
    """

    def __init__(self, payload):
        if isinstance(payload, (str, numbers.Integral)):
            raise TypeError(
                'Payload must be a sequence of bytes, got {}'.format(
                    type(payload).__name__
                )
            )
        self._payload = bytes(payload)
        self._name = None
        self._width = None
        self._height = None
        self._preserve_aspect_ratio = None
        self._inline = None

    @property
    def payload(self):
        return self._payload

    @property
    def display_name(self):
        return self._name

    def _replace(self, **fields):
        image = copy.copy(self)
        for field, value in fields.items():
            setattr(image, '_' + field, value)
        return image

    def name(self, value):
        """Sets the suggested filename.

        The name is emitted verbatim; callers must not pass `;` or `:`.
        """
        if not isinstance(value, str):
            raise TypeError('Name must be a string, got {!r}'.format(value))
        return self._replace(name=value)

    def width_spec(self, spec):
        if not isinstance(spec, LengthSpec):
            raise TypeError('Expected a LengthSpec, got {!r}'.format(spec))
        return self._replace(width=spec)

    def width(self, cells):
        return self.width_spec(Cells(cells))

    def width_px(self, pixels):
        return self.width_spec(Pixels(pixels))

    def width_percent(self, percent):
        return self.width_spec(Percent(percent))

    def width_auto(self):
        return self.width_spec(Auto())

    def height_spec(self, spec):
        if not isinstance(spec, LengthSpec):
            raise TypeError('Expected a LengthSpec, got {!r}'.format(spec))
        return self._replace(height=spec)

    def height(self, cells):
        return self.height_spec(Cells(cells))

    def height_px(self, pixels):
        return self.height_spec(Pixels(pixels))

    def height_percent(self, percent):
        return self.height_spec(Percent(percent))

    def height_auto(self):
        return self.height_spec(Auto())

    def preserve_aspect_ratio(self, value):
        return self._replace(preserve_aspect_ratio=bool(value))

    def inline(self, value):
        return self._replace(inline=bool(value))

    def build(self):
        """Returns the escape sequence for the image."""
        fields = ['size={}'.format(len(self._payload))]

        if self._name is not None:
            fields.append('name={}'.format(self._name))
        if self._width is not None:
            fields.append('width={}'.format(self._width.render()))
        if self._height is not None:
            fields.append('height={}'.format(self._height.render()))
        if self._preserve_aspect_ratio is not None:
            fields.append('preserve_aspect_ratio={}'.format(
                int(self._preserve_aspect_ratio)
            ))
        if self._inline is not None:
            fields.append('inline={}'.format(int(self._inline)))

        logger.debug('Encoding {} bytes with {}'.format(
            len(self._payload), ';'.join(fields)
        ))

        encoded = base64.b64encode(self._payload).decode('ascii')
        return PREFIX + ';'.join(fields) + SEPARATOR + encoded + TERMINATOR

    def __repr__(self):
        return (
            'PendingImage(size={}, name={!r}, width={!r}, height={!r})'.format(
                len(self._payload), self._name, self._width, self._height
            )
        )


def from_bytes(payload):
    """Returns a `PendingImage` for `payload` with no options set."""
    return PendingImage(payload)
