__version__ = '0.1.0'

__title__ = 'iterm2img'
__description__ = 'Build iTerm2 inline image escape sequences'
__uri__ = 'https://iterm2.com/documentation-images.html'
__doc__ = __description__ + ' <' + __uri__ + '>'

__author__ = 'iterm2img contributors'
__email__ = 'iterm2img@users.noreply.github.com'

__license__ = 'BSD 3-Clause License'
__copyright__ = 'Copyright (c) 2026 iterm2img contributors'

from iterm2img.encoder import (  # noqa
    Auto, Cells, LengthSpec, PendingImage, Percent, Pixels, from_bytes,
    parse_length
)
