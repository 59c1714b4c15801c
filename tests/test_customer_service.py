"""CustomerService tests (also covers the shared EntityService skeleton)."""

import uuid

import pytest
from sqlalchemy import func, select

from grainbroker.middleware.exceptions import ValidationError
from grainbroker.models import Customer, Order
from grainbroker.persistence import GrainBrokerContext
from grainbroker.services.base import UpdateOutcome
from grainbroker.services.customer import CustomerService
from grainbroker.services.order import OrderService


async def _count(context: GrainBrokerContext, model) -> int:
    result = await context.session.execute(select(func.count()).select_from(model))
    return result.scalar_one()


@pytest.mark.unit
@pytest.mark.asyncio
class TestCustomerQueries:
    async def test_list_returns_all_customers(self, db_context):
        service = CustomerService(db_context)
        await service.create(Customer(location="Chicago, IL"))
        await service.create(Customer(location="Omaha, NE"))

        customers = await service.list()

        assert len(customers) == 2
        assert {c.location for c in customers} == {"Chicago, IL", "Omaha, NE"}

    async def test_list_empty(self, db_context):
        assert await CustomerService(db_context).list() == []

    async def test_get_by_id_returns_customer(self, db_context, customer):
        found = await CustomerService(db_context).get_by_id(customer.id)

        assert found is not None
        assert found.id == customer.id
        assert found.location == "Chicago, IL"

    async def test_get_by_id_unknown_returns_none(self, db_context):
        assert await CustomerService(db_context).get_by_id(uuid.uuid4()) is None

    async def test_exists(self, db_context, customer):
        service = CustomerService(db_context)
        assert await service.exists(customer.id) is True
        assert await service.exists(uuid.uuid4()) is False


@pytest.mark.unit
@pytest.mark.asyncio
class TestCustomerCreate:
    async def test_create_generates_id(self, db_context):
        created = await CustomerService(db_context).create(Customer(location="Chicago, IL"))

        assert isinstance(created.id, uuid.UUID)
        assert created.location == "Chicago, IL"

    async def test_create_keeps_caller_id(self, db_context):
        customer_id = uuid.uuid4()
        created = await CustomerService(db_context).create(
            Customer(id=customer_id, location="Chicago, IL")
        )
        assert created.id == customer_id

    async def test_created_customer_round_trips(self, db_context, session_factory):
        created = await CustomerService(db_context).create(Customer(location="Kansas City, MO"))

        async with session_factory() as session:
            fetched = await CustomerService(GrainBrokerContext(session)).get_by_id(created.id)

        assert fetched is not None
        assert (fetched.id, fetched.location) == (created.id, "Kansas City, MO")

    async def test_create_none_raises(self, db_context):
        with pytest.raises(ValidationError, match="Customer is required"):
            await CustomerService(db_context).create(None)

    @pytest.mark.parametrize("location", [None, "", "   ", "\t\n"])
    async def test_create_blank_location_raises_and_persists_nothing(self, db_context, location):
        service = CustomerService(db_context)

        with pytest.raises(ValidationError) as exc_info:
            await service.create(Customer(location=location))

        assert exc_info.value.message == "Location is required"
        assert exc_info.value.status_code == 400
        assert await _count(db_context, Customer) == 0

    async def test_create_location_too_long_raises(self, db_context):
        with pytest.raises(ValidationError, match="cannot exceed 200 characters"):
            await CustomerService(db_context).create(Customer(location="x" * 201))

    async def test_create_location_at_limit(self, db_context):
        created = await CustomerService(db_context).create(Customer(location="x" * 200))
        assert len(created.location) == 200


@pytest.mark.unit
@pytest.mark.asyncio
class TestCustomerUpdate:
    async def test_update_replaces_row(self, db_context, session_factory, customer):
        outcome = await CustomerService(db_context).update(
            customer.id, Customer(id=customer.id, location="Peoria, IL")
        )

        assert outcome is UpdateOutcome.UPDATED
        async with session_factory() as session:
            fetched = await GrainBrokerContext(session).find(Customer, customer.id)
        assert fetched.location == "Peoria, IL"

    async def test_update_mismatched_id_writes_nothing(self, db_context, session_factory, customer):
        outcome = await CustomerService(db_context).update(
            uuid.uuid4(), Customer(id=customer.id, location="Peoria, IL")
        )

        assert outcome is UpdateOutcome.ID_MISMATCH
        async with session_factory() as session:
            fetched = await GrainBrokerContext(session).find(Customer, customer.id)
        assert fetched.location == "Chicago, IL"

    async def test_update_unknown_id_is_not_found(self, db_context):
        missing = uuid.uuid4()
        outcome = await CustomerService(db_context).update(
            missing, Customer(id=missing, location="Peoria, IL")
        )
        assert outcome is UpdateOutcome.NOT_FOUND

    async def test_update_after_concurrent_delete_is_not_found(self, db_context, session_factory):
        service = CustomerService(db_context)
        created = await service.create(Customer(location="Chicago, IL"))

        async with session_factory() as session:
            assert await CustomerService(GrainBrokerContext(session)).delete(created.id) is True

        outcome = await service.update(created.id, Customer(id=created.id, location="Peoria, IL"))
        assert outcome is UpdateOutcome.NOT_FOUND

    async def test_update_blank_location_raises(self, db_context, customer):
        with pytest.raises(ValidationError, match="Location is required"):
            await CustomerService(db_context).update(customer.id, Customer(id=customer.id, location=" "))

    async def test_update_none_raises(self, db_context, customer):
        with pytest.raises(ValidationError):
            await CustomerService(db_context).update(customer.id, None)


@pytest.mark.unit
@pytest.mark.asyncio
class TestCustomerDelete:
    async def test_delete_existing(self, db_context, customer):
        service = CustomerService(db_context)

        assert await service.delete(customer.id) is True
        assert await service.get_by_id(customer.id) is None

    async def test_delete_unknown_returns_false(self, db_context):
        assert await CustomerService(db_context).delete(uuid.uuid4()) is False

    async def test_delete_cascades_to_orders(self, db_context, customer, supplier, make_order):
        orders = OrderService(db_context)
        first = await orders.create(make_order(customer.id, supplier.id))
        second = await orders.create(make_order(customer.id, supplier.id, order_req_amt_ton=250))

        assert await CustomerService(db_context).delete(customer.id) is True

        assert await orders.get_by_id(first.id) is None
        assert await orders.get_by_id(second.id) is None
        assert await _count(db_context, Order) == 0
