import secrets
import time


def generate_order_id(sequence: int) -> str:
    """
    ORD-<last 6 digits of epoch millis>-<sequence>
    """
    stamp = str(int(time.time() * 1000))[-6:]
    return f"ORD-{stamp}-{sequence}"


def generate_temp_password(length: int = 10) -> str:
    return secrets.token_urlsafe(length)[:length]
