"""
Point d'entrée pour `python -m llm_toolkit`.
"""
import asyncio
import logging
import sys

import httpx

from .config.settings import ToolkitConfig
from .core.exceptions import LLMToolkitError
from .toolkit import LLMToolkit


def build_parser():
    """Parser argparse de la ligne de commande."""
    import argparse

    parser = argparse.ArgumentParser(description="LLM Toolkit: envoie un prompt à un provider LLM")
    parser.add_argument("prompt", help="Message utilisateur")
    parser.add_argument("--config", default=None, help="Fichier TOML de configuration")
    parser.add_argument("--provider", default=None, help="Provider (openai, anthropic, google, custom)")
    parser.add_argument("--model", default=None, help="Modèle à utiliser")
    parser.add_argument("--system", default=None, help="Prompt système de la conversation")
    parser.add_argument("--no-stream", action="store_true", help="Désactiver le streaming")
    parser.add_argument("--verbose", action="store_true", help="Logs DEBUG")
    return parser


async def run(args) -> str:
    """Crée une conversation, envoie le prompt et retourne la réponse."""
    config = ToolkitConfig.from_file(args.config) if args.config else ToolkitConfig()
    toolkit = LLMToolkit(config)

    conversation_id = toolkit.create_conversation(args.system)
    options = {"provider": args.provider, "model": args.model}

    if args.no_stream:
        answer = await toolkit.send_completion(conversation_id, args.prompt, options)
        print(answer)
        return answer

    def print_chunk(text: str):
        print(text, end="", flush=True)

    answer = await toolkit.stream_completion(conversation_id, args.prompt, print_chunk, options)
    print()
    return answer


def main(argv=None) -> int:
    """Fonction principale."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )

    try:
        asyncio.run(run(args))
    except (LLMToolkitError, httpx.HTTPError) as e:
        print(f"❌ {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
