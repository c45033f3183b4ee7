# core/tests/test_read_context.py
import threading
import time
from unittest.mock import Mock, call

from django.db import OperationalError, connection
from django.test import SimpleTestCase, TestCase

from apps.geoapp.models import Location
from core.exceptions import SearchTimeoutException, StoreUnavailableException
from core.read_context import ReadContext


class ReadContextTest(SimpleTestCase):
    def test_no_deadline(self):
        ctx = ReadContext()
        self.assertIsNone(ctx.remaining())
        self.assertFalse(ctx.expired())
        ctx.check("anything")

    def test_with_timeout(self):
        ctx = ReadContext.with_timeout(30)
        self.assertGreater(ctx.remaining(), 29)
        self.assertFalse(ctx.expired())

    def test_expired_deadline(self):
        ctx = ReadContext(deadline=time.monotonic() - 1)

        self.assertEqual(ctx.remaining(), 0.0)
        with self.assertRaises(SearchTimeoutException) as cm:
            ctx.check("time_rules")
        self.assertEqual(cm.exception.stage, "time_rules")
        self.assertEqual(cm.exception.status_code, 504)

    def test_cancellation(self):
        cancel = threading.Event()
        ctx = ReadContext.with_timeout(None, cancel_event=cancel)
        ctx.check("spatial_query")

        cancel.set()
        self.assertTrue(ctx.is_cancelled())
        with self.assertRaises(SearchTimeoutException):
            ctx.check("spatial_query")

    def test_read_translates_database_errors(self):
        ctx = ReadContext()
        with self.assertRaises(StoreUnavailableException) as cm:
            with ctx.read("reservations"):
                raise OperationalError("server closed the connection unexpectedly")

        self.assertEqual(cm.exception.stage, "reservations")
        self.assertIsInstance(cm.exception.cause, OperationalError)
        self.assertTrue(cm.exception.is_transient)

    def test_read_passes_other_errors_through(self):
        with self.assertRaises(ValueError):
            with ReadContext().read("reservations"):
                raise ValueError("not a store error")

    def test_read_checks_deadline_first(self):
        ctx = ReadContext(deadline=0.0)
        entered = False
        with self.assertRaises(SearchTimeoutException):
            with ctx.read("table_query"):
                entered = True
        self.assertFalse(entered)

    def test_queryset_alias(self):
        self.assertIsNone(ReadContext().queryset(Location.objects)._db)
        self.assertEqual(ReadContext(using="replica").queryset(Location.objects)._db, "replica")

    def test_slow_read_past_deadline_is_a_timeout(self):
        ctx = ReadContext.with_timeout(0.05)
        with self.assertRaises(SearchTimeoutException) as cm:
            with ctx.read("spatial_query"):
                time.sleep(0.1)
                raise OperationalError("canceling statement due to statement timeout")

        self.assertEqual(cm.exception.stage, "spatial_query")
        self.assertIsInstance(cm.exception.__cause__, OperationalError)

    def test_cancelled_statement_is_a_timeout(self):
        class QueryCanceled(Exception):
            sqlstate = "57014"

        error = OperationalError("canceling statement due to user request")
        error.__cause__ = QueryCanceled()

        with self.assertRaises(SearchTimeoutException) as cm:
            with ReadContext().read("reservations"):
                raise error
        self.assertEqual(cm.exception.stage, "reservations")


class BoundedExecuteTest(SimpleTestCase):
    """The execute wrapper hands the remaining budget to the database"""

    def make_context(self, vendor, in_atomic_block=False):
        db = Mock(vendor=vendor, in_atomic_block=in_atomic_block)
        return {"connection": db, "cursor": Mock()}

    def test_postgresql_statement_timeout(self):
        ctx = ReadContext.with_timeout(2)
        context = self.make_context("postgresql")
        execute = Mock(return_value="rows")

        result = ctx.bounded_execute(execute, "SELECT 1", None, False, context)

        self.assertEqual(result, "rows")
        execute.assert_called_once_with("SELECT 1", None, False, context)
        raw_calls = context["cursor"].cursor.execute.call_args_list
        self.assertEqual(len(raw_calls), 2)
        set_sql = raw_calls[0].args[0]
        self.assertTrue(set_sql.startswith("SET statement_timeout = "))
        self.assertTrue(0 < int(set_sql.rsplit(" ", 1)[1]) <= 2000)
        self.assertEqual(raw_calls[1], call("RESET statement_timeout"))

    def test_postgresql_statement_timeout_reset_after_failure(self):
        ctx = ReadContext.with_timeout(2)
        context = self.make_context("postgresql")
        execute = Mock(side_effect=OperationalError("canceling statement due to statement timeout"))

        with self.assertRaises(OperationalError):
            ctx.bounded_execute(execute, "SELECT 1", None, False, context)
        self.assertEqual(
            context["cursor"].cursor.execute.call_args_list[-1], call("RESET statement_timeout")
        )

    def test_postgresql_transaction_uses_set_local(self):
        ctx = ReadContext.with_timeout(2)
        context = self.make_context("postgresql", in_atomic_block=True)

        ctx.bounded_execute(Mock(), "SELECT 1", None, False, context)

        raw_calls = context["cursor"].cursor.execute.call_args_list
        self.assertEqual(len(raw_calls), 1)
        self.assertTrue(raw_calls[0].args[0].startswith("SET LOCAL statement_timeout = "))

    def test_expired_deadline_skips_the_statement(self):
        ctx = ReadContext(deadline=0.0)
        execute = Mock()

        with self.assertRaises(SearchTimeoutException):
            ctx.bounded_execute(execute, "SELECT 1", None, False, self.make_context("postgresql"))
        execute.assert_not_called()

    def test_other_backends_pass_through(self):
        ctx = ReadContext.with_timeout(2)
        context = self.make_context("oracle")
        execute = Mock(return_value="rows")

        self.assertEqual(ctx.bounded_execute(execute, "SELECT 1", None, False, context), "rows")
        context["cursor"].cursor.execute.assert_not_called()


class ReadContextDatabaseTest(TestCase):
    """Deadlines interrupt statements that are already running"""

    SLOW_QUERY = (
        "WITH RECURSIVE counter(n) AS ("
        "SELECT 1 UNION ALL SELECT n + 1 FROM counter WHERE n < 100000000"
        ") SELECT count(*) FROM counter"
    )

    def run_slow_query(self, ctx, stage="spatial_query"):
        with ctx.read(stage):
            with connection.cursor() as cursor:
                cursor.execute(self.SLOW_QUERY)
                return cursor.fetchone()

    def test_running_query_stops_at_deadline(self):
        started = time.monotonic()

        with self.assertRaises(SearchTimeoutException) as cm:
            self.run_slow_query(ReadContext.with_timeout(0.2))

        self.assertEqual(cm.exception.stage, "spatial_query")
        self.assertLess(time.monotonic() - started, 5)

    def test_running_query_stops_on_cancel(self):
        cancel = threading.Event()
        timer = threading.Timer(0.2, cancel.set)
        timer.start()
        try:
            with self.assertRaises(SearchTimeoutException):
                self.run_slow_query(ReadContext(cancel_event=cancel), stage="reservations")
        finally:
            timer.cancel()

    def test_fast_query_unaffected(self):
        with ReadContext.with_timeout(5).read("table_query"):
            with connection.cursor() as cursor:
                cursor.execute("SELECT 1")
                self.assertEqual(cursor.fetchone(), (1,))
