from devsetup.cli import main

if __name__ == "__main__":  # pragma: no cover - exercised via python -m devsetup
    raise SystemExit(main())
