from rest_framework import serializers

from limits.services.query_limits import format_duration, parse_duration


class LimitDurationField(serializers.Field):
    """Durée en syntaxe Prometheus ("30s", "14d", "1h30m") <-> timedelta."""

    default_error_messages = {
        "invalid": "Invalid duration {value!r}: expected e.g. \"30s\", \"1h30m\", \"14d\".",
    }

    def to_representation(self, value):
        return format_duration(value)

    def to_internal_value(self, data):
        try:
            return parse_duration(data)
        except ValueError:
            self.fail("invalid", value=data)
