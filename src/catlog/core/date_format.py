from datetime import datetime


DEFAULT_FORMAT = "%Y-%m-%d %H:%M:%S"


def format_date(moment: datetime) -> str:
    """
    Render a timestamp as "YYYY-MM-DD HH:mm:ss.SSS".

    Milliseconds are truncated from the microsecond field and
    zero-padded to three digits.
    """
    return f"{moment.strftime(DEFAULT_FORMAT)}.{moment.microsecond // 1000:03d}"
