import secrets
import string


def random_id(length=24):
    # Create a sequence of letters and digits
    characters = string.ascii_letters + string.digits
    return ''.join(secrets.choice(characters) for _ in range(length))
