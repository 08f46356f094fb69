"""Field generators: one independent draw per record field.

Every function takes the random source (a ``random.Random``) and, where it
needs realistic strings, a ``Faker`` instance, so tests can seed both.
"""

import uuid

from faker import Faker

from ingress_faker.weighted import roll_percent, weighted_choice

# "/" and "-" are overrepresented so paths lean towards nested, hyphenated words.
PATH_SEPARATORS = ("-", "-", "_", "%20", "/", "/", "/")
PATH_EXTENSIONS = (".html", ".php", ".htm", ".jpg", ".png", ".gif", ".svg", ".css", ".js")

NON_OK_STATUS_CODES = (
    201, 204, 301, 302, 304, 400, 401, 403, 404, 405, 409, 429, 500, 502, 503, 504,
)

ERROR_BODY_BYTES = (30, 120)
PAYLOAD_BYTES = (800, 3100)
REQUEST_TIME_RANGE = (0.001, 2.0)


def make_faker(seed=None) -> Faker:
    faker = Faker()
    faker.seed_instance(seed)
    return faker


def pick_method(rng, faker, thresholds) -> str:
    return weighted_choice(roll_percent(rng), thresholds, faker.http_method)


def pick_status(rng, ok_percent: float) -> int:
    return weighted_choice(
        roll_percent(rng),
        [(200, ok_percent)],
        lambda: rng.choice(NON_OK_STATUS_CODES),
    )


def pick_ip(rng, faker, ipv4_percent: float) -> str:
    version = weighted_choice(roll_percent(rng), [("ipv4", ipv4_percent)], lambda: "ipv6")
    if version == "ipv4":
        return faker.ipv4()
    return faker.ipv6()


def synthesize_path(rng, faker, min_len: int, max_len: int) -> str:
    """Build ``/word<sep>word...<ext>`` with between min_len and max_len words."""
    depth = rng.randint(min_len, max_len)
    path = faker.word()
    for _ in range(depth - 1):
        path += rng.choice(PATH_SEPARATORS) + faker.word()
    path = "/" + path + rng.choice(PATH_EXTENSIONS)
    return path.replace(" ", "%20")


def bytes_sent(rng, status_code: int) -> str:
    """Short bodies for anything but 200, typical payload sizes otherwise."""
    lo, hi = PAYLOAD_BYTES if status_code == 200 else ERROR_BODY_BYTES
    return str(rng.randint(lo, hi))


def request_time(rng) -> float:
    return rng.uniform(*REQUEST_TIME_RANGE)


def request_id(rng) -> str:
    return str(uuid.UUID(int=rng.getrandbits(128), version=4))


def join_url(host: str, path: str) -> str:
    return f"{host}/{path.removeprefix('/')}"
