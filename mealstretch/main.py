import argparse
import logging

import uvicorn

from mealstretch.utilities.config import APP_HOST, APP_PORT, LOG_LEVEL


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Run the MealStretch backend")
    parser.add_argument("--narration-only", action="store_true",
                        help="serve only the disaster simulator narration endpoint")
    args = parser.parse_args()

    logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    target = "mealstretch.api.routes.narrate:app" if args.narration_only else "mealstretch.api.api_run:app"
    # Print a friendly message that points to the URL you can open in a browser
    print(f"Uvicorn running on http://localhost:{APP_PORT} (Press CTRL+C to quit)")
    uvicorn.run(target, host=APP_HOST, port=APP_PORT)
