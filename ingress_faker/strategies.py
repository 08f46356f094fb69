"""Field sources: where each record field gets its value from.

``WeightedFields`` synthesizes values from the configured percentages and
narrows a field to its allow-list when one is configured. ``FixedFields``
only ever picks from the allow-lists.
"""

import logging

from ingress_faker import fields
from ingress_faker.weighted import cumulative_thresholds

logger = logging.getLogger(__name__)


class FieldSource:
    """One draw per call, no state carried between calls."""

    def __init__(self, config, rng, faker):
        self._config = config
        self._rng = rng
        self._faker = faker

    def method(self) -> str:
        raise NotImplementedError

    def status_code(self) -> int:
        raise NotImplementedError

    def ip(self) -> str:
        raise NotImplementedError

    def path(self) -> str:
        raise NotImplementedError

    def host(self) -> str:
        raise NotImplementedError

    def referrer(self) -> str:
        return ""

    def user_agent(self) -> str:
        return self._faker.user_agent()

    def bytes_sent(self, status_code: int) -> str:
        return fields.bytes_sent(self._rng, status_code)

    def request_time(self) -> float:
        return fields.request_time(self._rng)

    def request_id(self) -> str:
        return fields.request_id(self._rng)


class WeightedFields(FieldSource):
    def __init__(self, config, rng, faker):
        super().__init__(config, rng, faker)
        self._method_thresholds = cumulative_thresholds(config.method_percents)

    def _from_list(self, values, synthesize):
        if values:
            return self._rng.choice(values)
        return synthesize()

    def method(self) -> str:
        return self._from_list(
            self._config.http_methods,
            lambda: fields.pick_method(self._rng, self._faker, self._method_thresholds),
        )

    def status_code(self) -> int:
        return self._from_list(
            self._config.status_codes,
            lambda: fields.pick_status(self._rng, self._config.status_ok_percent),
        )

    def ip(self) -> str:
        return self._from_list(
            self._config.ip_addresses,
            lambda: fields.pick_ip(self._rng, self._faker, self._config.ipv4_percent),
        )

    def path(self) -> str:
        return self._from_list(
            self._config.paths,
            lambda: fields.synthesize_path(
                self._rng, self._faker, self._config.path_min, self._config.path_max
            ),
        )

    def host(self) -> str:
        return self._from_list(self._config.hosts, self._faker.domain_name)

    def referrer(self) -> str:
        return self._faker.url()


class FixedFields(FieldSource):
    def method(self) -> str:
        return self._rng.choice(self._config.http_methods)

    def status_code(self) -> int:
        return self._rng.choice(self._config.status_codes)

    def ip(self) -> str:
        return self._rng.choice(self._config.ip_addresses)

    def path(self) -> str:
        return self._rng.choice(self._config.paths)

    def host(self) -> str:
        return self._rng.choice(self._config.hosts)


_SOURCES = {
    "weighted": WeightedFields,
    "fixed": FixedFields,
}


def get_field_source(config, rng, faker) -> FieldSource:
    """Return the field source for ``config.mode``."""
    source = _SOURCES[config.mode](config, rng, faker)
    logger.debug("Using %s field source", type(source).__name__)
    return source
