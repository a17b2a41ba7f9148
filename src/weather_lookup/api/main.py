import uvicorn

from src.weather_lookup.api.app import create_app
from src.weather_lookup.utils.common import get_env_var

app = create_app()


def run() -> None:
    """Serve the API with uvicorn on HOST:PORT."""
    host = get_env_var("HOST", "127.0.0.1")
    port = int(get_env_var("PORT", "8000"))
    uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    run()
