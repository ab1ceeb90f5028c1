#!/usr/bin/env python3
"""
blox-coach CLI
Serve the HTTP router or chat in the terminal.
"""
import sys

from .config import cfg_get


def serve(host="0.0.0.0", port=9100):
    """Launch the router"""
    try:
        import uvicorn
        print(f"[blox-coach] Starting router on {host}:{port}")
        uvicorn.run(
            "blox_coach.router_fastapi:app",
            host=host,
            port=port,
            reload=False,
        )
    except KeyboardInterrupt:
        print("\n[blox-coach] Shutting down...")
    except Exception as e:
        print(f"[blox-coach] ERROR: {e}")
        import traceback
        traceback.print_exc()
        return False
    return True


def chat(seed=None, stdin=None, stdout=None):
    """Interactive terminal session against the coach engine."""
    import random

    from .chunking import paced
    from .engine import CoachEngine
    from .session_state import new_state

    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout
    engine = CoachEngine.from_config(rng=random.Random(seed))
    state = new_state()

    stdout.write("Blox coach ready. Ctrl-D or 'quit' to exit.\n")
    while True:
        stdout.write("> ")
        stdout.flush()
        line = stdin.readline()
        if not line or line.strip().lower() in ("quit", "exit"):
            break
        if not line.strip():
            continue
        result = engine.handle(line, state)
        state = result.state
        for seg in paced(result.segments, engine.settings.chunk_delay_ms):
            stdout.write(seg + "\n")
            stdout.flush()
    return True


def main(argv=None):
    import argparse

    parser = argparse.ArgumentParser(
        description="blox-coach: Blox Fruits PvP chat coach",
        epilog="Example: blox-coach serve --port 9100"
    )

    subparsers = parser.add_subparsers(dest="command")

    serve_parser = subparsers.add_parser("serve", help="Start the router")
    serve_parser.add_argument("--host", default=str(cfg_get("server.host", "0.0.0.0")), help="Host")
    serve_parser.add_argument("--port", type=int, default=int(cfg_get("server.port", 9100)), help="Port")

    chat_parser = subparsers.add_parser("chat", help="Chat in the terminal")
    chat_parser.add_argument("--seed", type=int, default=None, help="Seed for greeting variety")

    args = parser.parse_args(argv)

    if args.command == "serve":
        success = serve(host=args.host, port=args.port)
        sys.exit(0 if success else 1)
    elif args.command == "chat":
        chat(seed=args.seed)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
