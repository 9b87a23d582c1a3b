from datetime import timedelta

from django.test import SimpleTestCase, RequestFactory

from limits.context import inject_query_limits
from limits.exceptions import LimitExceeded, TenantLookupFailed
from limits.services.ceilings import SettingsTenantLimits, TenantCeiling, TenantLimitSource
from limits.services.limiter import QueryLimiter
from limits.services.query_limits import QueryLimits

S = timedelta(seconds=1)
D = timedelta(days=1)


class CountingSource(TenantLimitSource):
    def __init__(self, ceiling):
        self.ceiling = ceiling
        self.calls = 0

    def get_ceiling(self, tenant_id):
        self.calls += 1
        return self.ceiling


class QueryLimiterTest(SimpleTestCase):
    def setUp(self):
        # "fake": 30s partout, 10 lignes; "open": aucun plafond; "broken": config invalide
        self.source = SettingsTenantLimits(TenantCeiling(), {
            "fake": {
                "query_timeout": "30s",
                "max_query_lookback": "30s",
                "max_query_length": "30s",
                "max_entries_limit_per_query": 10,
            },
            "open": {},
            "broken": {"query_timeout": "soon"},
        })
        self.limiter = QueryLimiter(self.source)
        self.factory = RequestFactory()

    def _request(self, limits: QueryLimits | None = None):
        request = self.factory.get("/")
        if limits is not None:
            inject_query_limits(request, limits)
        return request

    def _all(self, request, tenant_id="fake"):
        return (
            self.limiter.query_timeout(request, tenant_id),
            self.limiter.max_query_lookback(request, tenant_id),
            self.limiter.max_query_length(request, tenant_id),
            self.limiter.max_entries_limit_per_query(request, tenant_id),
        )

    def test_defaults_without_override(self):
        self.assertEqual(self._all(self._request()), (30 * S, 30 * S, 30 * S, 10))

    def test_reject_high_limits(self):
        request = self._request(QueryLimits(
            max_query_length=2 * D,
            max_query_lookback=14 * D,
            max_entries_limit_per_query=100,
            query_timeout=100 * S,
        ))
        for accessor in (self.limiter.query_timeout, self.limiter.max_query_lookback,
                         self.limiter.max_query_length, self.limiter.max_entries_limit_per_query):
            with self.assertRaises(LimitExceeded):
                accessor(request, "fake")

    def test_rejection_names_dimension_and_values(self):
        request = self._request(QueryLimits(max_query_lookback=14 * D))
        with self.assertRaises(LimitExceeded) as cm:
            self.limiter.max_query_lookback(request, "fake")
        err = cm.exception
        self.assertEqual(err.dimension, "max_query_lookback")
        self.assertEqual(err.requested, 14 * D)
        self.assertEqual(err.limit, 30 * S)
        self.assertEqual(str(err), "max_query_lookback: requested 2w exceeds tenant limit 30s")
        self.assertEqual(err.as_details(),
                         {"dimension": "max_query_lookback", "requested": "2w", "limit": "30s"})

    def test_accept_lower_limits(self):
        request = self._request(QueryLimits(
            max_query_length=29 * S,
            max_query_lookback=29 * S,
            max_entries_limit_per_query=9,
            query_timeout=29 * S,
        ))
        self.assertEqual(self._all(request), (29 * S, 29 * S, 29 * S, 9))

    def test_partial_override(self):
        request = self._request(QueryLimits(query_timeout=29 * S))
        self.assertEqual(self._all(request), (29 * S, 30 * S, 30 * S, 10))

    def test_equal_override_accepted(self):
        request = self._request(QueryLimits(
            query_timeout=30 * S, max_query_lookback=30 * S,
            max_query_length=30 * S, max_entries_limit_per_query=10,
        ))
        self.assertEqual(self._all(request), (30 * S, 30 * S, 30 * S, 10))

    def test_violation_does_not_affect_other_dimensions(self):
        request = self._request(QueryLimits(query_timeout=10 * S, max_query_lookback=D))
        self.assertEqual(self.limiter.query_timeout(request, "fake"), 10 * S)
        self.assertEqual(self.limiter.max_query_length(request, "fake"), 30 * S)
        with self.assertRaises(LimitExceeded):
            self.limiter.max_query_lookback(request, "fake")

    def test_zero_ceiling_accepts_any_override(self):
        request = self._request(QueryLimits(
            query_timeout=365 * D, max_query_lookback=3650 * D,
            max_query_length=365 * D, max_entries_limit_per_query=10**9,
        ))
        self.assertEqual(self._all(request, "open"), (365 * D, 3650 * D, 365 * D, 10**9))
        self.assertEqual(self._all(self._request(), "open"), (timedelta(0),) * 3 + (0,))

    def test_unknown_tenant_gets_defaults(self):
        self.assertEqual(self._all(self._request(), "nobody"), (timedelta(0),) * 3 + (0,))

    def test_lookup_failure_propagates(self):
        with self.assertRaises(TenantLookupFailed) as cm:
            self.limiter.query_timeout(self._request(), "broken")
        self.assertEqual(cm.exception.tenant_id, "broken")

    def test_unknown_dimension(self):
        with self.assertRaises(ValueError):
            self.limiter.resolve("max_bytes", self._request(), "fake")

    def test_repeated_resolution_is_stable(self):
        request = self._request(QueryLimits(max_entries_limit_per_query=5))
        first = self._all(request)
        self.assertEqual(self._all(request), first)
        self.assertEqual(first, (30 * S, 30 * S, 30 * S, 5))

    def test_ceiling_fetched_on_every_call(self):
        source = CountingSource(TenantCeiling(query_timeout=30 * S))
        limiter = QueryLimiter(source)
        request = self._request()
        limiter.query_timeout(request, "fake")
        limiter.query_timeout(request, "fake")
        self.assertEqual(source.calls, 2)

        source.ceiling = TenantCeiling(query_timeout=20 * S)
        self.assertEqual(limiter.query_timeout(request, "fake"), 20 * S)

    def test_effective_limits(self):
        request = self._request(QueryLimits(query_timeout=29 * S))
        self.assertEqual(
            self.limiter.effective_limits(request, "fake"),
            QueryLimits(query_timeout=29 * S, max_query_lookback=30 * S,
                        max_query_length=30 * S, max_entries_limit_per_query=10),
        )
        with self.assertRaises(LimitExceeded):
            self.limiter.effective_limits(self._request(QueryLimits(max_entries_limit_per_query=11)), "fake")
