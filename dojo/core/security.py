import random
import string
from typing import Optional

from dojo.core.config import settings

ACCESS_CODE_ALPHABET = string.ascii_uppercase + string.digits

def generate_access_code(length: Optional[int] = None) -> str:
    """
    Generates the short management code handed out when a tournament is created.
    The code is a low-assurance shared secret, not a credential: it is stored and
    compared in plaintext and never expires.
    """
    length = length or settings.ACCESS_CODE_LENGTH
    return "".join(random.choices(ACCESS_CODE_ALPHABET, k=length))

def verify_access_code(expected: str, provided: Optional[str]) -> bool:
    if not provided:
        return False
    return provided.strip() == expected
