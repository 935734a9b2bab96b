"""
bmfontkit.storage.fontfiles - load and save descriptors

(c) 2019--2024 Rob Hagemans
licence: https://opensource.org/licenses/MIT
"""

import sys
import logging
from inspect import signature
from pathlib import Path

from ..errors import FileFormatError
from ..settings import LoadSettings
from .base import loaders, savers
from .streams import Stream


##############################################################################
# loading

def load(infile='', *, format='', settings=None, **kwargs):
    """
    Read font from descriptor file.

    infile: input file, path or bytes (default: stdin)
    format: input format (default: infer from magic number or filename)
    settings: LoadSettings to apply when building the font
    kwargs: overrides for individual load settings
    """
    if infile is None or infile == '':
        infile = sys.stdin
    settings = LoadSettings.create(settings, **kwargs)
    if isinstance(infile, (str, Path)):
        with open(infile, 'rb') as instream:
            return _load_stream(
                Stream(instream, 'r'), format=format, settings=settings
            )
    return _load_stream(Stream(infile, 'r'), format=format, settings=settings)


def _load_stream(instream, *, format='', settings=None):
    """Load font from open stream."""
    tried_formats = []
    for loader in loaders.get_for(instream, format=format):
        tried_formats.append(loader.format)
        logging.info("Loading '%s' as format `%s`", instream.name, loader.format)
        try:
            return loader(instream, settings)
        except FileFormatError as e:
            logging.debug(e)
    message = f"Unable to read font from '{instream.name}': "
    if not tried_formats:
        message += f'format specifier `{format}` not recognised.'
    else:
        message += 'tried formats: ' + ', '.join(tried_formats)
    raise FileFormatError(message)


##############################################################################
# saving

def save(font, outfile='', *, format='', overwrite=False, **kwargs):
    """
    Write font to descriptor file.

    outfile: output file or path (default: stdout)
    format: descriptor format (default: infer from filename)
    overwrite: if outfile is a path, allow overwriting existing file
    kwargs: format-specific saver options
    """
    if outfile is None or outfile == '':
        outfile = sys.stdout
    if isinstance(outfile, (str, Path)):
        if Path(outfile).exists() and not overwrite:
            raise FileExistsError(
                f"Overwriting existing file '{outfile}'"
                ' requires -overwrite to be set'
            )
        with open(outfile, 'wb') as outstream:
            _save_stream(font, Stream(outstream, 'w'), format=format, **kwargs)
    else:
        outstream = Stream(outfile, 'w')
        _save_stream(font, outstream, format=format, **kwargs)
        outstream.flush()
    return font


def _save_stream(font, outstream, *, format='', **kwargs):
    """Save font to an open stream."""
    matching_savers = savers.get_for(outstream, format=format)
    if not matching_savers:
        raise FileFormatError(
            'Could not infer output file format from filename '
            f'`{outstream.name}`, please specify -format'
        )
    if len(matching_savers) > 1:
        raise FileFormatError(
            f"Format for output filename '{outstream.name}' is ambiguous: "
            f'specify -format with one of the values '
            f'({", ".join(_s.format for _s in matching_savers)})'
        )
    saver, *_ = matching_savers
    logging.info('Saving `%s` as %s.', outstream.name, saver.format)
    saver(font, outstream, **_filter_arguments(saver, kwargs))


def _filter_arguments(saver, kwargs):
    """Drop saver options the format does not take."""
    accepted = signature(saver).parameters
    for key in kwargs:
        if key not in accepted:
            logging.warning(
                'Argument `%s` not recognised by format `%s`.', key, saver.format
            )
    return {_k: _v for _k, _v in kwargs.items() if _k in accepted}
