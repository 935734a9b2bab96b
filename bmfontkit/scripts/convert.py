"""
Convert BMFont descriptors between binary, text, xml and json
(c) 2019--2024 Rob Hagemans, licence: https://opensource.org/licenses/MIT
"""

import sys
import argparse
import logging

import bmfontkit
from bmfontkit.scripting import wrap_main


def _get_parser():
    formats = ', '.join(bmfontkit.loaders.get_formats())
    parser = argparse.ArgumentParser(
        prog='bmfont-convert',
        description='Convert BMFont descriptors between formats.',
    )
    parser.add_argument(
        'infile', nargs='?', type=str, default='',
        help='input descriptor (default: stdin)'
    )
    parser.add_argument(
        'outfile', nargs='?', type=str, default='',
        help='output descriptor (default: stdout)'
    )
    parser.add_argument(
        '--format', default='', type=str,
        help=f'input format, one of {formats} (default: infer)'
    )
    parser.add_argument(
        '--to', default='', type=str, dest='to_format',
        help=f'output format, one of {formats} (default: infer from filename)'
    )
    parser.add_argument(
        '--ignore-counts', action='store_true',
        help='do not check declared char, kerning and page counts'
    )
    parser.add_argument(
        '--allow-control-characters', action='store_true',
        help='accept control characters in face and page names'
    )
    parser.add_argument(
        '--ignore-invalid-tags', action='store_true',
        help='skip unrecognised tags instead of failing'
    )
    parser.add_argument(
        '--no-strict', action='store_true',
        help='write binary descriptors other readers may misinterpret'
    )
    parser.add_argument(
        '--overwrite', action='store_true',
        help='allow overwriting an existing output file'
    )
    parser.add_argument(
        '--debug', action='store_true',
        help='enable debugging output'
    )
    parser.add_argument(
        '--version', action='version', version=bmfontkit.constants.BMFONTKIT
    )
    return parser


def main(argv=None):
    args = _get_parser().parse_args(argv)
    with wrap_main(args.debug):
        infile = args.infile or sys.stdin.buffer
        font = bmfontkit.load(
            infile,
            format=args.format,
            ignore_counts=args.ignore_counts,
            allow_string_control_characters=args.allow_control_characters,
            ignore_invalid_tags=args.ignore_invalid_tags,
        )
        logging.debug(
            'Loaded `%s`: %d chars, %d kernings.',
            font.info.face, len(font.chars), len(font.kernings)
        )
        save_kwargs = {}
        if args.no_strict:
            save_kwargs['strict'] = False
        outfile = args.outfile or sys.stdout.buffer
        bmfontkit.save(
            font, outfile, format=args.to_format,
            overwrite=args.overwrite, **save_kwargs
        )


if __name__ == '__main__':
    main()
