from datetime import timedelta

from django.test import SimpleTestCase

from limits.services.query_limits import (
    QueryLimits, format_duration, format_query_limits_header, parse_duration,
    parse_query_limits_header,
)


class DurationTest(SimpleTestCase):
    def test_parse(self):
        self.assertEqual(parse_duration("30s"), timedelta(seconds=30))
        self.assertEqual(parse_duration("1h30m"), timedelta(hours=1, minutes=30))
        self.assertEqual(parse_duration("14d"), timedelta(days=14))
        self.assertEqual(parse_duration("1w2d"), timedelta(days=9))
        self.assertEqual(parse_duration("1y"), timedelta(days=365))
        self.assertEqual(parse_duration("500ms"), timedelta(milliseconds=500))
        self.assertEqual(parse_duration("1m500ms"), timedelta(minutes=1, milliseconds=500))
        self.assertEqual(parse_duration("0"), timedelta(0))
        self.assertEqual(parse_duration("0s"), timedelta(0))

    def test_parse_invalid(self):
        for raw in ("", "30", "1.5h", "h", "-1s", "30s1h", " 30s"):
            with self.subTest(raw=raw):
                with self.assertRaises(ValueError):
                    parse_duration(raw)
        with self.assertRaises(ValueError):
            parse_duration(30)

    def test_parse_out_of_range(self):
        with self.assertRaisesRegex(ValueError, "out of range"):
            parse_duration("999999999y")
        with self.assertRaises(ValueError):
            parse_query_limits_header('{"maxQueryLookback":"999999999y"}')

    def test_format(self):
        self.assertEqual(format_duration(timedelta(0)), "0s")
        self.assertEqual(format_duration(timedelta(minutes=90)), "1h30m")
        self.assertEqual(format_duration(timedelta(days=14)), "2w")
        self.assertEqual(format_duration(timedelta(hours=721)), "4w2d1h")
        self.assertEqual(format_duration(timedelta(milliseconds=1500)), "1s500ms")
        with self.assertRaises(ValueError):
            format_duration(timedelta(seconds=-1))


class QueryLimitsHeaderTest(SimpleTestCase):
    def test_parse_header(self):
        limits = parse_query_limits_header(
            '{"queryTimeout":"29s","maxEntriesLimitPerQuery":9,"somethingElse":1}'
        )
        self.assertEqual(limits, QueryLimits(query_timeout=timedelta(seconds=29),
                                             max_entries_limit_per_query=9))
        self.assertEqual(limits.overridden(), ["query_timeout", "max_entries_limit_per_query"])
        self.assertFalse(limits.is_set("max_query_lookback"))

    def test_parse_empty_object(self):
        limits = parse_query_limits_header("{}")
        self.assertEqual(limits, QueryLimits())
        self.assertEqual(limits.overridden(), [])

    def test_parse_header_invalid(self):
        for raw in ("not json", "[]", '"30s"',
                    '{"maxEntriesLimitPerQuery":"9"}',
                    '{"maxEntriesLimitPerQuery":true}',
                    '{"maxEntriesLimitPerQuery":-1}',
                    '{"queryTimeout":"abc"}',
                    '{"maxQueryLength":30}'):
            with self.subTest(raw=raw):
                with self.assertRaises(ValueError):
                    parse_query_limits_header(raw)

    def test_format_header_omits_unset(self):
        limits = QueryLimits(max_query_lookback=timedelta(days=14), max_entries_limit_per_query=100)
        raw = format_query_limits_header(limits)
        self.assertEqual(raw, '{"maxQueryLookback":"2w","maxEntriesLimitPerQuery":100}')
        self.assertEqual(parse_query_limits_header(raw), limits)

    def test_negative_values_rejected(self):
        with self.assertRaises(ValueError):
            QueryLimits(query_timeout=timedelta(seconds=-1))
