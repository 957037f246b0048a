from unittest.mock import patch

import pytest
from sqlalchemy.exc import SQLAlchemyError

from models.notification import Notification
from models.ticket import Ticket
from services.notification_dispatcher import (
    Delivery,
    NotificationDispatcher,
    TicketState,
    plan_ticket_created,
    plan_ticket_updated,
)
from utils.exceptions import InternalError, NotFoundError, ValidationError


def _state(user_id=10, technician_id=None, status_id=1):
    return TicketState(
        ticket_id=5,
        user_id=user_id,
        technician_id=technician_id,
        status_id=status_id,
    )


class TestPlanTicketCreated:
    def test_creator_admins_and_technician(self):
        deliveries = plan_ticket_created(
            ticket_id=5,
            status_name="Open",
            creator_id=10,
            technician_id=20,
            admin_ids=[1, 2],
        )

        assert [d.recipient_id for d in deliveries] == [10, 1, 2, 20]
        assert deliveries[0].message == (
            "Your ticket #5 has been created and is now Open."
        )
        assert deliveries[1].message == (
            "A new ticket #5 has been created by a user."
        )
        assert deliveries[-1].message == "You have been assigned to ticket #5."

    def test_without_creator_admins_see_admin_origin(self):
        deliveries = plan_ticket_created(5, "Open", None, None, [1])

        assert deliveries == [
            Delivery(1, 5, "A new ticket #5 has been created by an admin.")
        ]

    def test_admin_creator_gets_both_messages(self):
        deliveries = plan_ticket_created(5, "Open", 1, None, [1, 1])

        assert [d.recipient_id for d in deliveries] == [1, 1]
        assert len({d.message for d in deliveries}) == 2


class TestPlanTicketUpdated:
    def test_status_change_notifies_creator_only(self):
        deliveries = plan_ticket_updated(
            _state(technician_id=20),
            _state(technician_id=20, status_id=3),
            "Closed",
        )

        assert deliveries == [
            Delivery(
                10, 5, "Status of your ticket #5 has been updated to Closed."
            )
        ]

    def test_status_change_goes_to_previous_creator(self):
        deliveries = plan_ticket_updated(
            _state(user_id=10), _state(user_id=11, status_id=2), "In Progress"
        )

        assert [d.recipient_id for d in deliveries] == [10]

    def test_status_change_without_creator(self):
        assert plan_ticket_updated(
            _state(user_id=None), _state(user_id=None, status_id=2), "Closed"
        ) == []

    @pytest.mark.parametrize(
        "before,after,expected",
        [
            (20, 21, [(20, "unassigned from"), (21, "assigned to")]),
            (None, 21, [(21, "assigned to")]),
            (20, None, [(20, "unassigned from")]),
            (20, 20, []),
        ],
    )
    def test_technician_changes(self, before, after, expected):
        deliveries = plan_ticket_updated(
            _state(technician_id=before), _state(technician_id=after)
        )

        assert [(d.recipient_id, d.message) for d in deliveries] == [
            (recipient, f"You have been {phrase} ticket #5.")
            for recipient, phrase in expected
        ]


class TestNotificationDispatcher:
    @pytest.fixture
    def ticket(self, db_session, catalog, statuses, make_user):
        owner = make_user("faculty", name="owner")
        ticket = Ticket(
            department_id=catalog["department"].id,
            category_id=catalog["category"].id,
            status_id=statuses["Open"].id,
            user_id=owner.id,
        )
        db_session.add(ticket)
        db_session.commit()
        db_session.refresh(ticket)
        return ticket

    def test_notify_writes_one_row(self, db_session, ticket):
        notification = NotificationDispatcher(db_session).notify(
            ticket.user_id, ticket.id, "hello"
        )

        assert notification.id is not None
        assert notification.is_read is False
        assert db_session.query(Notification).count() == 1

    def test_failed_inserts_are_reported_not_raised(
        self, db_session, ticket, make_user
    ):
        make_user("admin")
        dispatcher = NotificationDispatcher(db_session)

        with patch.object(
            db_session, "commit", side_effect=SQLAlchemyError("disk full")
        ):
            report = dispatcher.ticket_created(ticket, "Open")

        assert not report.ok
        assert len(report.failed) == 2
        assert report.delivered == []
        assert str(report) == "0 delivered, 2 failed"
        assert db_session.query(Notification).count() == 0

    def test_one_failure_does_not_stop_the_rest(self, db_session, ticket):
        dispatcher = NotificationDispatcher(db_session)
        real_commit = db_session.commit
        calls = []

        def flaky_commit():
            calls.append(1)
            if len(calls) == 1:
                raise SQLAlchemyError("locked")
            real_commit()

        deliveries = [
            Delivery(ticket.user_id, ticket.id, "first"),
            Delivery(ticket.user_id, ticket.id, "second"),
        ]
        with patch.object(db_session, "commit", side_effect=flaky_commit):
            report = dispatcher.dispatch(deliveries)

        assert [d.message for d in report.failed] == ["first"]
        assert [n.message for n in report.delivered] == ["second"]

    def test_broadcast_to_creator(self, db_session, ticket):
        notification = NotificationDispatcher(db_session).broadcast(
            ticket.id, message="Technician on the way"
        )

        assert notification.user_id == ticket.user_id
        assert notification.message == "Technician on the way"

    def test_broadcast_builds_status_message(self, db_session, ticket):
        notification = NotificationDispatcher(db_session).broadcast(
            ticket.id, status_name="Closed", actor_name="tech"
        )

        assert notification.message == (
            f'Ticket #{ticket.id} has been updated to "Closed" by tech.'
        )

    def test_broadcast_requires_message(self, db_session, ticket):
        with pytest.raises(ValidationError):
            NotificationDispatcher(db_session).broadcast(ticket.id)

    def test_broadcast_missing_ticket(self, db_session):
        with pytest.raises(NotFoundError):
            NotificationDispatcher(db_session).broadcast(9999, message="hi")

    def test_broadcast_without_creator_writes_nothing(
        self, db_session, ticket
    ):
        ticket.user_id = None
        db_session.commit()

        result = NotificationDispatcher(db_session).broadcast(
            ticket.id, message="hi"
        )

        assert result is None
        assert db_session.query(Notification).count() == 0

    def test_broadcast_storage_failure_is_raised(self, db_session, ticket):
        dispatcher = NotificationDispatcher(db_session)

        with patch.object(
            db_session, "commit", side_effect=SQLAlchemyError("locked")
        ):
            with pytest.raises(InternalError):
                dispatcher.broadcast(ticket.id, message="hi")
