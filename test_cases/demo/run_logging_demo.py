"""run_logging_demo.py

Configures the default manager from the bundled descriptor and logs a
few events. Run from the repository root:

    python test_cases/demo/run_logging_demo.py
"""

import os
import tempfile
from pathlib import Path

import catlog

FIXTURE = Path(__file__).resolve().parent.parent / "fixtures" / "with-log-level-filter.json"


def main() -> None:
    workdir = tempfile.mkdtemp(prefix="catlog-demo-")
    os.chdir(workdir)

    catlog.configure(str(FIXTURE))
    catlog.add_appender(catlog.console_appender())

    log = catlog.get_logger("tests")
    log.info("main")
    log.error("both")
    log.warn("both", {"name": "DemoWarning", "message": "pretend error"})
    try:
        1 / 0
    except ZeroDivisionError as e:
        log.debug("main", e)

    catlog.shutdown()

    for name in ("tmp-tests.log", "tmp-tests-warnings.log"):
        print(f"--- {name}")
        print(Path(workdir, name).read_text(), end="")


if __name__ == "__main__":
    main()
