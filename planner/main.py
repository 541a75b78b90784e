import logging

import uvicorn
from planner.api.api_run import create_app
from planner.utilities.config import APP_HOST, APP_PORT, DATA_DIR, LOG_LEVEL


def main():
    logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    # Data directory is created on the first write
    print(f"Planner data in {DATA_DIR}; API on http://localhost:{APP_PORT} (Press CTRL+C to quit)")
    uvicorn.run(create_app(DATA_DIR), host=APP_HOST, port=APP_PORT)


if __name__ == "__main__":
    main()
