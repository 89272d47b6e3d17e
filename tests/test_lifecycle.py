from decimal import Decimal
from unittest import mock

from django.db import OperationalError
from django.test import TestCase

from parking_management.core.booking import lifecycle
from parking_management.core.booking.availability import available_spots, is_available, spot_lock
from parking_management.core.booking.intervals import TimeInterval
from parking_management.core.exceptions import (
    ConflictError,
    InvalidStateError,
    NotFound,
    PermissionDenied,
    ValidationError,
)
from parking_management.core.models import ParkingRequest, RequestStatus, Role, Spot
from tests.helpers import T0, actor, at, make_park, make_request, make_user


class LifecycleTestCase(TestCase):

    def setUp(self):
        self.owner = make_user('owner@example.com', Role.OWNER)
        self.driver = make_user('driver@example.com')
        self.other_driver = make_user('other@example.com')
        self.admin = make_user('admin@example.com', Role.ADMIN)
        self.park = make_park(self.owner)
        self.spot = self.park.spots.get(spot_number='S-001')

    def _create(self, start, end=None, user=None, spot=None):
        return lifecycle.create_request(
            actor(user or self.driver),
            park_id=self.park.id,
            spot_id=(spot or self.spot).id,
            start_time=start,
            end_time=end,
        )

    def test_create_is_pending_with_quote(self):
        request = self._create(T0, at(90))

        self.assertEqual(request.status, RequestStatus.PENDING)
        self.assertEqual(request.total_amount, Decimal('15.00'))

    def test_create_ongoing_session_has_no_amount(self):
        request = self._create(T0)

        self.assertIsNone(request.end_time)
        self.assertEqual(request.total_amount, Decimal('0.00'))

    def test_create_rejects_bad_ordering(self):
        with self.assertRaises(ValidationError):
            self._create(at(60), at(60))
        with self.assertRaises(ValidationError):
            self._create(at(60), at(0))

    def test_create_rejects_end_without_start(self):
        with self.assertRaises(ValidationError):
            self._create(None, at(60))

    def test_create_requires_approved_park(self):
        pending_park = make_park(self.owner, approved=False)
        with self.assertRaises(NotFound):
            lifecycle.create_request(actor(self.driver), pending_park.id, self.spot.id, T0, at(60))

    def test_create_requires_spot_of_park(self):
        other_park = make_park(self.owner)
        foreign_spot = other_park.spots.first()
        with self.assertRaises(NotFound):
            self._create(T0, at(60), spot=foreign_spot)

    def test_create_rejects_overlap_with_approved(self):
        make_request(self.other_driver, self.park, self.spot, T0, at(60), status=RequestStatus.APPROVED)
        with self.assertRaises(ConflictError):
            self._create(at(30), at(90))
        self._create(at(120), at(180))

    def test_approve_bills_bounded_request(self):
        request = self._create(T0, at(90))
        approved = lifecycle.approve_request(actor(self.owner), request.id)

        self.assertEqual(approved.status, RequestStatus.APPROVED)
        self.assertEqual(approved.total_amount, Decimal('15.00'))

    def test_approve_overlap_conflicts_and_leaves_state(self):
        first = self._create(T0, at(60))
        second = self._create(at(30), at(90), user=self.other_driver)
        lifecycle.approve_request(actor(self.owner), first.id)

        with self.assertRaises(ConflictError):
            lifecycle.approve_request(actor(self.owner), second.id)

        first.refresh_from_db()
        second.refresh_from_db()
        self.assertEqual(first.status, RequestStatus.APPROVED)
        self.assertEqual(second.status, RequestStatus.PENDING)

    def test_ongoing_session_blocks_spot(self):
        ongoing = self._create(T0)
        later = self._create(at(10_000), at(10_060), user=self.other_driver)
        lifecycle.approve_request(actor(self.owner), ongoing.id)

        with self.assertRaises(ConflictError):
            lifecycle.approve_request(actor(self.owner), later.id)
        self.assertFalse(is_available(self.spot.id, TimeInterval(at(50_000), at(50_060))))

    def test_only_owner_decides(self):
        request = self._create(T0, at(60))
        with self.assertRaises(PermissionDenied):
            lifecycle.approve_request(actor(self.admin), request.id)
        with self.assertRaises(PermissionDenied):
            lifecycle.reject_request(actor(self.driver), request.id)

    def test_reject_pending(self):
        request = self._create(T0, at(60))
        rejected = lifecycle.reject_request(actor(self.owner), request.id)
        self.assertEqual(rejected.status, RequestStatus.REJECTED)

        with self.assertRaises(InvalidStateError):
            lifecycle.approve_request(actor(self.owner), request.id)

    def test_cancel_pending_yields_cancelled(self):
        request = self._create(T0, at(60))
        cancelled = lifecycle.cancel_request(actor(self.driver), request.id)
        self.assertEqual(cancelled.status, RequestStatus.CANCELLED)

    def test_cancel_approved_fails_naming_status(self):
        request = self._create(T0, at(60))
        lifecycle.approve_request(actor(self.owner), request.id)

        with self.assertRaisesMessage(InvalidStateError, 'approved'):
            lifecycle.cancel_request(actor(self.driver), request.id)

    def test_cancel_by_other_user_is_forbidden(self):
        request = self._create(T0, at(60))
        with self.assertRaises(PermissionDenied):
            lifecycle.cancel_request(actor(self.other_driver), request.id)

    def test_update_pending_requotes(self):
        request = self._create(T0, at(60))
        updated = lifecycle.update_request(actor(self.driver), request.id, {'end_time': at(120), 'plate_number': 'AB-123'})

        self.assertEqual(updated.total_amount, Decimal('20.00'))
        self.assertEqual(updated.plate_number, 'AB-123')

    def test_update_non_pending_fails(self):
        request = self._create(T0, at(60))
        lifecycle.approve_request(actor(self.owner), request.id)
        with self.assertRaises(InvalidStateError):
            lifecycle.update_request(actor(self.driver), request.id, {'end_time': at(120)})

    def test_exit_bills_elapsed_time(self):
        request = self._create(T0)
        lifecycle.approve_request(actor(self.owner), request.id)

        exited = lifecycle.exit_request(actor(self.driver), request.id, now=at(30))

        self.assertEqual(exited.status, RequestStatus.COMPLETED)
        self.assertEqual(exited.end_time, at(30))
        self.assertEqual(exited.total_amount, Decimal('5.00'))
        self.assertTrue(is_available(self.spot.id, TimeInterval(at(60), at(120))))

    def test_exit_twice_fails(self):
        request = self._create(T0)
        lifecycle.approve_request(actor(self.owner), request.id)
        lifecycle.exit_request(actor(self.driver), request.id, now=at(30))

        with self.assertRaisesMessage(InvalidStateError, 'already exited'):
            lifecycle.exit_request(actor(self.driver), request.id, now=at(60))

    def test_exit_bounded_request_fails(self):
        request = self._create(T0, at(60))
        lifecycle.approve_request(actor(self.owner), request.id)
        with self.assertRaisesMessage(InvalidStateError, 'already exited'):
            lifecycle.exit_request(actor(self.driver), request.id, now=at(30))

    def test_exit_requires_approval_and_elapsed_time(self):
        request = self._create(T0)
        with self.assertRaises(InvalidStateError):
            lifecycle.exit_request(actor(self.driver), request.id, now=at(30))

        lifecycle.approve_request(actor(self.owner), request.id)
        with self.assertRaises(ValidationError):
            lifecycle.exit_request(actor(self.driver), request.id, now=T0)

    def test_exit_missing_request(self):
        with self.assertRaises(NotFound):
            lifecycle.exit_request(actor(self.driver), 999_999, now=at(30))

    def test_read_access(self):
        request = self._create(T0, at(60))
        for reader in (self.driver, self.owner, self.admin):
            self.assertEqual(lifecycle.get_request(actor(reader), request.id).id, request.id)
        with self.assertRaises(PermissionDenied):
            lifecycle.get_request(actor(self.other_driver), request.id)

    def test_listing(self):
        self._create(T0, at(60))
        self._create(at(120), at(180), user=self.other_driver)

        self.assertEqual(lifecycle.user_requests(actor(self.driver)).count(), 1)
        self.assertEqual(lifecycle.owner_requests(actor(self.owner)).count(), 2)

    def test_available_spots_excludes_booked(self):
        make_request(self.driver, self.park, self.spot, T0, at(60), status=RequestStatus.APPROVED)
        make_request(self.driver, self.park, self.park.spots.get(spot_number='S-002'), T0, at(60))

        spots = available_spots(self.park.id, TimeInterval(at(30), at(90)))
        self.assertEqual([spot.spot_number for spot in spots], ['S-002', 'S-003'])

    def test_no_two_approved_requests_overlap(self):
        pending = [
            self._create(at(start), at(start + 45), user=self.driver if index % 2 else self.other_driver)
            for index, start in enumerate([0, 30, 60, 90, 200, 260])
        ]
        for request in pending:
            try:
                lifecycle.approve_request(actor(self.owner), request.id)
            except ConflictError:
                pass

        approved = [
            TimeInterval(start, end)
            for start, end in ParkingRequest.objects.filter(
                spot=self.spot, status=RequestStatus.APPROVED,
            ).values_list('start_time', 'end_time')
        ]
        self.assertGreater(len(approved), 1)
        for i, first in enumerate(approved):
            for second in approved[i + 1:]:
                self.assertFalse(first.overlaps(second))

    def test_update_onto_approved_interval_conflicts(self):
        make_request(self.other_driver, self.park, self.spot, at(120), at(180), status=RequestStatus.APPROVED)
        request = self._create(T0, at(60))

        with self.assertRaises(ConflictError):
            lifecycle.update_request(actor(self.driver), request.id, {'start_time': at(150), 'end_time': at(210)})

        request.refresh_from_db()
        self.assertEqual((request.start_time, request.end_time), (T0, at(60)))
        self.assertEqual(request.status, RequestStatus.PENDING)

    def test_update_by_other_user_is_forbidden(self):
        request = self._create(T0, at(60))
        with self.assertRaises(PermissionDenied):
            lifecycle.update_request(actor(self.owner), request.id, {'end_time': at(120)})

    def test_missing_spot_is_not_found(self):
        with self.assertRaises(NotFound):
            is_available(999_999, TimeInterval(T0, at(60)))
        with self.assertRaises(NotFound):
            with spot_lock(999_999):
                pass
        with self.assertRaises(NotFound):
            lifecycle.create_request(actor(self.driver), self.park.id, 999_999, T0, at(60))

    def test_spot_lock_timeout_is_a_conflict(self):
        locked = OperationalError('database is locked')
        with mock.patch.object(Spot.objects, 'select_for_update', side_effect=locked):
            with self.assertRaises(ConflictError):
                with spot_lock(self.spot.id):
                    pass

    def test_exit_by_park_owner_and_admin(self):
        for closer in (self.owner, self.admin):
            with self.subTest(closer=closer.email):
                request = self._create(T0)
                lifecycle.approve_request(actor(self.owner), request.id)

                exited = lifecycle.exit_request(actor(closer), request.id, now=at(60))

                self.assertEqual(exited.status, RequestStatus.COMPLETED)
                self.assertEqual(exited.total_amount, Decimal('10.00'))

    def test_exit_by_other_user_is_forbidden(self):
        request = self._create(T0)
        lifecycle.approve_request(actor(self.owner), request.id)
        with self.assertRaises(PermissionDenied):
            lifecycle.exit_request(actor(self.other_driver), request.id, now=at(30))

    def test_request_deleted_before_lock_is_not_found(self):
        request = self._create(T0, at(60))
        stale = ParkingRequest.objects.select_related('park').get(pk=request.id)
        request.delete()

        with mock.patch.object(lifecycle, '_get_request', return_value=stale):
            with self.assertRaisesMessage(NotFound, 'Request not found'):
                lifecycle.cancel_request(actor(self.driver), stale.id)
