"""Command-line entrypoint to run an AURAFIT recommendation or search locally."""

import argparse
import json

from aurafit_app.app import AuraFitApp
from aurafit_app.config import AuraFitConfig


def main() -> None:
    parser = argparse.ArgumentParser(description="AURAFIT makeup recommendations")
    parser.add_argument("prompt", nargs="*", help="free-text makeup request or search query")
    parser.add_argument("--search", action="store_true", help="search the catalogue instead of recommending a look")
    parser.add_argument("--offline", action="store_true", help="serve looks from the fallback table only")
    args = parser.parse_args()

    config = AuraFitConfig.from_env()
    if args.offline:
        config.genai_provider = "offline"
    app = AuraFitApp(config=config)

    prompt = " ".join(args.prompt) or "natural everyday makeup"
    result = app.search_catalog(prompt) if args.search else app.get_recommendation(prompt)
    print(json.dumps(result.to_dict(), indent=2))


if __name__ == "__main__":
    main()
