# mdclip/__main__.py

from mdclip.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
