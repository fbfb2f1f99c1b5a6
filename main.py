import argparse
import logging
from typing import Iterable, Optional

from sha import SHA1

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def _parse_hex_bytes(value: str) -> bytes:
	text = "".join(value.split())
	try:
		return bytes.fromhex(text)
	except ValueError as exc:
		raise SystemExit("Message must be provided as hexadecimal text") from exc


def _positive_int(value: str) -> int:
	try:
		number = int(value)
	except ValueError as exc:
		raise argparse.ArgumentTypeError("Chunk size must be an integer") from exc
	if number <= 0:
		raise argparse.ArgumentTypeError("Chunk size must be positive")
	return number


def read_message(args: argparse.Namespace) -> bytes:
	if args.message_hex is not None:
		return _parse_hex_bytes(args.message_hex)
	try:
		return args.message.encode(args.encoding)
	except LookupError as exc:
		raise SystemExit(f"Unknown encoding: {args.encoding}") from exc


def hash_message(message: bytes, chunk_size: Optional[int] = None) -> str:
	engine = SHA1()
	if chunk_size is None:
		engine.update(message)
	else:
		for offset in range(0, len(message), chunk_size):
			engine.update(message[offset : offset + chunk_size])
	logger.info("Hashing %d bytes", engine.message_length)
	return engine.finalize_hex()


def build_parser() -> argparse.ArgumentParser:
	parser = argparse.ArgumentParser(description="SHA-1 digest of a message")
	parser.add_argument(
		"message",
		nargs="?",
		default="abc",
		help="Text message to hash (default: abc)",
	)
	parser.add_argument("--message-hex", help="Hash these raw bytes, given as hex, instead of the text message")
	parser.add_argument("--encoding", default="utf-8", help="Encoding of the text message (default: utf-8)")
	parser.add_argument(
		"--chunk-size",
		type=_positive_int,
		help="Feed the message to the engine in chunks of this many bytes",
	)
	parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
	return parser


def main(argv: Optional[Iterable[str]] = None) -> int:
	parser = build_parser()
	args = parser.parse_args(argv)

	logging.basicConfig(
		level=logging.DEBUG if args.verbose else logging.WARNING,
		format=LOG_FORMAT,
	)

	message = read_message(args)
	print(hash_message(message, args.chunk_size))
	return 0


if __name__ == "__main__":  # pragma: no cover
	raise SystemExit(main())
