"""Allow nobuild to be executable through `python -m nobuild`."""

from nobuild.cli import main

if __name__ == "__main__":
    main(prog_name="nobuild")
