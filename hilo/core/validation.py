import re

def is_valid_sample(v: int) -> bool:
    return isinstance(v, int) and not isinstance(v, bool) and 0 <= v <= 9

def is_valid_period_id(s: str) -> bool:
    return bool(re.fullmatch(r"[0-9A-Za-z_-]{1,64}", s or ""))
