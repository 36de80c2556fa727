from __future__ import annotations

import argparse
import logging

import uvicorn

from checkers.core.state import MAX_DIFFICULTY, MIN_DIFFICULTY
from checkers.server.app import create_app
from checkers.server.schemas import ConfigRequest
from checkers.server.session import GameSession

logger = logging.getLogger("checkers")


def parse_args(argv=None) -> argparse.Namespace:
	parser = argparse.ArgumentParser(description="Serve a checkers game against the minimax opponent over HTTP.")
	parser.add_argument("--host", default="127.0.0.1", help="Interface to bind.")
	parser.add_argument("--port", type=int, default=8000, help="Port to listen on.")
	parser.add_argument(
		"--difficulty",
		type=int,
		choices=range(MIN_DIFFICULTY, MAX_DIFFICULTY + 1),
		default=MIN_DIFFICULTY,
		help="Starting difficulty of the automated white player.",
	)
	parser.add_argument("--seed", type=int, default=None, help="Seed for reproducible AI games.")
	parser.add_argument("--no-ai", action="store_true", help="Let two humans share the board.")
	parser.add_argument("--reload", action="store_true", help="Restart on code changes; ignores the game flags.")
	parser.add_argument("--log-level", default="info", help="Log level for uvicorn and the engine.")
	return parser.parse_args(argv)


def main(argv=None) -> None:
	args = parse_args(argv)
	options = dict(host=args.host, port=args.port, log_level=args.log_level)

	if args.reload:
		# Reload workers import the app by path, so they get the default session.
		uvicorn.run("checkers.server.app:app", reload=True, **options)
		return

	session = GameSession(args.difficulty)
	session.configure(ConfigRequest(aiEnabled=not args.no_ai, seed=args.seed))
	# uvicorn also accepts "trace", which logging does not know.
	logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.DEBUG))
	logger.info("Starting game: difficulty=%d ai=%s seed=%s", args.difficulty, not args.no_ai, args.seed)
	uvicorn.run(create_app(session), **options)


if __name__ == "__main__":
	main()
