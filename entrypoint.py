"""Backend entrypoint for packaged builds; starts uvicorn with the port from env."""

# Import the app object directly so frozen bundles can resolve the package
# (uvicorn's string-based import fails there).
from stockscope.main import run


if __name__ == "__main__":
    run()
