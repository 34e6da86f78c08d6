import pytest
import sys
import logging

# Configure logging
logging.basicConfig(stream=sys.stdout, level=logging.INFO)
log = logging.getLogger(__name__)

def main():
    """
    Run the directory search test suite with strict settings.

    Extra command-line arguments are passed through to pytest
    (e.g. `python run_tests.py -k ranker`).
    """
    log.info("--- Running directory search tests ---")

    # -W error: treat warnings as errors
    # -rS: show a summary of skipped tests
    args = ["-W", "error", "-rS", "tests/"] + sys.argv[1:]

    try:
        exit_code = pytest.main(args)
    except Exception as e:
        log.error(f"Pytest crashed: {e}", exc_info=True)
        sys.exit(1)

    if exit_code == 0:
        log.info("All tests passed without warnings.")
    else:
        log.warning(f"Pytest finished with exit code {exit_code}; see output above.")

    sys.exit(exit_code)

if __name__ == "__main__":
    main()
