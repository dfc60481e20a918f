#!/usr/bin/env python3
"""
xorbreak - XOR Cryptanalysis Tool

A command-line tool that recovers single-byte and repeating-key XOR keys
using English letter frequencies as the only oracle.
Useful for cryptography exercises and CTF challenges.
"""

import argparse
import sys
from pathlib import Path
from typing import Optional

from xorbreak.__version__ import __version__
from xorbreak.analysis import frequency_score, chi_square_score, hamming_distance
from xorbreak.breakers import SingleByteBreaker, RepeatingKeyBreaker
from xorbreak.config import BreakerConfig
from xorbreak.error_handling import XorBreakError, get_error_handler
from xorbreak.parallel import EXECUTORS
from xorbreak.utils.codec import decode_input, hex_encode, ENCODINGS
from xorbreak.utils.xor_tools import XORTools


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with one subcommand per engine operation"""
    parser = argparse.ArgumentParser(
        description='🔓 xorbreak - Statistical XOR Key Recovery',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
📖 QUICK START:

  Single-byte XOR (hex ciphertext):
    python main.py single cipher.hex

  Repeating-key XOR (base64 file):
    python main.py repeating cipher.b64 --encoding base64

  Force a keysize:
    python main.py repeating cipher.hex --keysize 3

  Score a text:
    echo "Cooking MC's like a pound of bacon" | python main.py score

  Hamming distance:
    python main.py hamming "this is a test" "wokka wokka!!!" --encoding raw

  Encrypt with a repeating key:
    python main.py encrypt plain.txt --key ICE

  XOR two hex strings:
    python main.py xor 1c0111001f 6869742074

  JSON API:
    python main.py serve --port 8080
        """
    )
    parser.add_argument('--version', action='version', version=f'xorbreak {__version__}')
    parser.add_argument('--debug', action='store_true', help='Verbose logging and tracebacks')

    subparsers = parser.add_subparsers(dest='command', required=True)

    # Input-reading subcommands share these options
    def add_input(sub: argparse.ArgumentParser, default_encoding: str = 'hex'):
        sub.add_argument('file', nargs='?', help='Input file (default: stdin)')
        sub.add_argument('--encoding', choices=ENCODINGS, default=default_encoding,
                         help=f'Input encoding (default: {default_encoding})')

    def add_engine(sub: argparse.ArgumentParser):
        engine = sub.add_argument_group('⚙️  Engine Options')
        engine.add_argument('--workers', type=int, dest='max_workers',
                            help='Worker count for parallel stages')
        engine.add_argument('--executor', choices=EXECUTORS,
                            help='Worker pool kind (default: thread)')

    single = subparsers.add_parser('single', help='Break single-byte XOR')
    add_input(single)
    add_engine(single)
    single.add_argument('--top', type=int, default=5, help='Show the N best keys')

    repeating = subparsers.add_parser('repeating', help='Break repeating-key XOR')
    add_input(repeating)
    add_engine(repeating)
    keys = repeating.add_argument_group('🔑 Keysize Options')
    keys.add_argument('--min-keysize', type=int, help='Smallest keysize to try (default: 2)')
    keys.add_argument('--max-keysize', type=int, help='Largest keysize to try (default: 40)')
    keys.add_argument('--candidates', type=int, dest='keysize_candidates',
                      help='Keysizes kept for verification (default: 5)')
    keys.add_argument('--keysize', type=int, help='Skip estimation and use this keysize')
    repeating.add_argument('--report', action='store_true',
                           help='Print keysize candidates and every verified key')

    score = subparsers.add_parser('score', help='Score a text for English likeness')
    add_input(score, default_encoding='raw')

    hamming = subparsers.add_parser('hamming', help='Bitwise Hamming distance')
    hamming.add_argument('left')
    hamming.add_argument('right')
    hamming.add_argument('--encoding', choices=ENCODINGS, default='hex')

    encrypt = subparsers.add_parser('encrypt', help='Repeating-key XOR, output as hex')
    add_input(encrypt, default_encoding='raw')
    encrypt.add_argument('--key', required=True, help='Key text (UTF-8)')

    fixed = subparsers.add_parser('xor', help='XOR two equal-length hex strings')
    fixed.add_argument('left')
    fixed.add_argument('right')

    serve = subparsers.add_parser('serve', help='Run the JSON web API')
    serve.add_argument('--port', type=int, default=8080)

    return parser


def read_input(path: Optional[str]) -> str:
    """
    Read input text from a file or stdin.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the input is empty
    """
    if path:
        file_path = Path(path)
        if not file_path.is_file():
            raise FileNotFoundError(f"File not found: {path}")
        content = file_path.read_text(encoding='utf-8')
    else:
        content = sys.stdin.read()

    if not content:
        raise ValueError("No input provided")
    return content


def engine_config(args: argparse.Namespace) -> BreakerConfig:
    names = ('min_keysize', 'max_keysize', 'keysize_candidates', 'max_workers', 'executor')
    return BreakerConfig.from_mapping({name: getattr(args, name, None) for name in names})


def run_single(args: argparse.Namespace) -> str:
    ciphertext = decode_input(read_input(args.file), args.encoding)
    breaker = SingleByteBreaker(engine_config(args).create_pool())
    best = breaker.break_ciphertext(ciphertext)
    return "\n".join([
        breaker.format_report(top_n=args.top),
        "",
        f"Key: 0x{best.key:02X} ({best.key_char!r})",
        f"Plaintext: {best.plaintext}",
    ])


def run_repeating(args: argparse.Namespace) -> str:
    ciphertext = decode_input(read_input(args.file), args.encoding)
    breaker = RepeatingKeyBreaker(engine_config(args))
    if args.keysize is not None:
        answer = breaker.solve_keysize(ciphertext, args.keysize)
    else:
        answer = breaker.break_ciphertext(ciphertext)

    lines = []
    if args.report:
        lines.extend([breaker.format_report(), ""])
    lines.extend([
        f"Key: {answer.key.hex().upper()} ({answer.key.decode('utf-8', errors='replace')!r})",
        f"Score: {answer.score:.4f}",
        "Plaintext:",
        answer.plaintext,
    ])
    return "\n".join(lines)


def run_score(args: argparse.Namespace) -> str:
    text = decode_input(read_input(args.file), args.encoding).decode('utf-8', errors='replace')
    try:
        chi2 = f"{chi_square_score(text):.4f}"
    except ZeroDivisionError:
        chi2 = "undefined (no letters or spaces)"
    return f"Frequency score: {frequency_score(text):.4f}\nChi-squared: {chi2}"


def run_hamming(args: argparse.Namespace) -> str:
    left = decode_input(args.left, args.encoding)
    right = decode_input(args.right, args.encoding)
    return str(hamming_distance(left, right))


def run_encrypt(args: argparse.Namespace) -> str:
    data = decode_input(read_input(args.file), args.encoding)
    return hex_encode(XORTools.repeating_key_xor(data, args.key.encode('utf-8')))


def run_xor(args: argparse.Namespace) -> str:
    return XORTools.xor_hex_strings(args.left, args.right)


def main(argv=None) -> int:
    """Main entry point for the xorbreak CLI"""
    parser = build_parser()
    args = parser.parse_args(argv)
    handler = get_error_handler(debug_mode=args.debug)

    commands = {
        'single': run_single,
        'repeating': run_repeating,
        'score': run_score,
        'hamming': run_hamming,
        'encrypt': run_encrypt,
        'xor': run_xor,
    }

    try:
        if args.command == 'serve':
            from xorbreak.web.server import BreakerWebServer
            BreakerWebServer().start(port=args.port, debug=args.debug)
            return 0

        print(commands[args.command](args))
        return 0
    except XorBreakError as e:
        handler.handle_error(e)
        return 1
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nOperation cancelled by user", file=sys.stderr)
        return 130


if __name__ == '__main__':
    sys.exit(main())
