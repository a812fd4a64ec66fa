import sys
from pathlib import Path

# Run straight from a checkout: make the 'src' layout importable.
SRC_PATH = Path(__file__).resolve().parent / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

try:
    from textsnip.app import main
except ImportError as e:
    print("Error: Could not import the TextSnip application.")
    print("Please install the dependencies first, e.g. `pip install -e .`.")
    print(f"Details: {e}")
    sys.exit(1)


if __name__ == '__main__':
    main()
