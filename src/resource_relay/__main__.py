import uvicorn
from uvicorn.config import LOGGING_CONFIG


def main():
    """Serve the relay, configured from the environment."""
    LOGGING_CONFIG["loggers"][__package__] = {
        "level": "DEBUG",
        "handlers": ["default"],
    }

    uvicorn.run(
        "resource_relay.app:create_app",
        factory=True,
        host="0.0.0.0",
        port=8000,
        log_config=LOGGING_CONFIG,
    )


if __name__ == "__main__":
    main()
