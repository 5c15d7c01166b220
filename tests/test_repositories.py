import asyncio
from datetime import datetime, timedelta
from decimal import Decimal

from sqlalchemy import insert
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from food_orders.application.interfaces import OrderAggregateQuery, UserCountQuery
from food_orders.domain.models import OrderStatus
from food_orders.domain.reports import day_bounds, day_half_open
from food_orders.infrastructure.db_schema import metadata, orders_tbl, order_detail_tbl, users_tbl
from food_orders.infrastructure.unit_of_work import UnitOfWork

NOW = datetime(2024, 3, 10, 1, 0, 0)


def run_with_store(scenario, orders=(), lines=(), users=()):
    """Поднимает SQLite в памяти со схемой сервиса, заполняет и выполняет сценарий."""
    async def run():
        engine = create_async_engine(
            "sqlite+aiosqlite://",
            poolclass=StaticPool,
            connect_args={"check_same_thread": False}
        )
        try:
            async with engine.begin() as conn:
                await conn.run_sync(metadata.create_all)
                if orders:
                    await conn.execute(insert(orders_tbl), list(orders))
                if lines:
                    await conn.execute(insert(order_detail_tbl), list(lines))
                if users:
                    await conn.execute(insert(users_tbl), list(users))
            return await scenario(UnitOfWork(async_sessionmaker(engine, expire_on_commit=False)))
        finally:
            await engine.dispose()

    return asyncio.run(run())


def order_row(order_id, order_time, status=OrderStatus.COMPLETED, amount="10.00"):
    return {
        "id": order_id,
        "number": f"N-{order_id}",
        "user_id": "user-1",
        "status": status,
        "amount": Decimal(amount),
        "order_time": order_time,
    }


def line_row(line_id, order_id, name, number):
    return {
        "id": line_id,
        "order_id": order_id,
        "name": name,
        "number": number,
        "amount": Decimal("1.00"),
    }


def user_row(user_id, create_time):
    return {"id": user_id, "create_time": create_time}


def test_order_at_end_of_day_is_counted_in_that_day():
    day = datetime(2024, 1, 1).date()
    orders = [
        order_row("o1", datetime(2024, 1, 1, 0, 0, 0), amount="1.00"),
        order_row("o2", datetime(2024, 1, 1, 23, 59, 59, 999999), amount="2.00"),
        order_row("o3", datetime(2024, 1, 2, 0, 0, 0), amount="4.00"),
    ]

    async def scenario(unit_of_work):
        begin, end = day_bounds(day)
        query = OrderAggregateQuery(status=OrderStatus.COMPLETED, begin=begin, end=end)
        async with unit_of_work() as uow:
            return await uow.orders.sum_amount(query), await uow.orders.count_orders(query)

    total, count = run_with_store(scenario, orders=orders)

    assert total == 3.0
    assert count == 2


def test_sum_amount_without_matching_orders_is_none():
    async def scenario(unit_of_work):
        begin, end = day_bounds(datetime(2024, 1, 1).date())
        async with unit_of_work() as uow:
            return await uow.orders.sum_amount(OrderAggregateQuery(begin=begin, end=end))

    assert run_with_store(scenario) is None


def test_count_orders_filters_by_status():
    orders = [
        order_row("o1", datetime(2024, 1, 1, 10, 0)),
        order_row("o2", datetime(2024, 1, 1, 11, 0), status=OrderStatus.CANCELLED),
        order_row("o3", datetime(2024, 1, 1, 12, 0), status=OrderStatus.PENDING_PAYMENT),
    ]

    async def scenario(unit_of_work):
        begin, end = day_bounds(datetime(2024, 1, 1).date())
        async with unit_of_work() as uow:
            all_orders = await uow.orders.count_orders(OrderAggregateQuery(begin=begin, end=end))
            completed = await uow.orders.count_orders(
                OrderAggregateQuery(status=OrderStatus.COMPLETED, begin=begin, end=end)
            )
            return all_orders, completed

    assert run_with_store(scenario, orders=orders) == (3, 1)


def test_user_registered_at_midnight_counts_on_next_day_only():
    users = [
        user_row("u1", datetime(2024, 1, 1, 12, 0)),
        user_row("u2", datetime(2024, 1, 2, 0, 0, 0)),
    ]

    async def scenario(unit_of_work):
        counts = []
        async with unit_of_work() as uow:
            for day in (datetime(2024, 1, 1).date(), datetime(2024, 1, 2).date()):
                day_start, next_day_start = day_half_open(day)
                counts.append(await uow.users.count_created(
                    UserCountQuery(begin=day_start, before=next_day_start)
                ))
            _, first_day_end = day_half_open(datetime(2024, 1, 1).date())
            total = await uow.users.count_created(UserCountQuery(before=first_day_end))
        return counts, total

    counts, total = run_with_store(scenario, users=users)

    assert counts == [1, 1]
    assert total == 1


def test_find_by_status_uses_strict_cutoff():
    cutoff = NOW - timedelta(minutes=15)
    orders = [
        order_row("exact", cutoff, status=OrderStatus.PENDING_PAYMENT),
        order_row("older", cutoff - timedelta(microseconds=1), status=OrderStatus.PENDING_PAYMENT),
        order_row("oldest", cutoff - timedelta(hours=1), status=OrderStatus.PENDING_PAYMENT),
        order_row("other", cutoff - timedelta(hours=1), status=OrderStatus.CONFIRMED),
    ]

    async def scenario(unit_of_work):
        async with unit_of_work() as uow:
            return await uow.orders.find_by_status_older_than(OrderStatus.PENDING_PAYMENT, cutoff)

    found = run_with_store(scenario, orders=orders)

    assert [o.id for o in found] == ["oldest", "older"]
    assert all(o.status == OrderStatus.PENDING_PAYMENT for o in found)


def test_update_reports_missing_order():
    orders = [order_row("o1", NOW - timedelta(hours=1), status=OrderStatus.PENDING_PAYMENT)]

    async def scenario(unit_of_work):
        async with unit_of_work() as uow:
            order = (await uow.orders.find_by_status_older_than(OrderStatus.PENDING_PAYMENT, NOW))[0]
            order.cancel("Таймаут оплаты", NOW)
            updated = await uow.orders.update(order)

            ghost = order.model_copy(update={"id": "missing"})
            missing = await uow.orders.update(ghost)
            await uow.commit()

        async with unit_of_work() as uow:
            cancelled = await uow.orders.find_by_status_older_than(OrderStatus.CANCELLED, NOW)
        return updated, missing, cancelled

    updated, missing, cancelled = run_with_store(scenario, orders=orders)

    assert updated is True
    assert missing is False
    assert [o.id for o in cancelled] == ["o1"]
    assert cancelled[0].cancel_time == NOW


def test_update_without_commit_is_rolled_back():
    orders = [order_row("o1", NOW - timedelta(hours=2), status=OrderStatus.DELIVERY_IN_PROGRESS)]

    async def scenario(unit_of_work):
        async with unit_of_work() as uow:
            order = (await uow.orders.find_by_status_older_than(OrderStatus.DELIVERY_IN_PROGRESS, NOW))[0]
            order.complete()
            await uow.orders.update(order)

        async with unit_of_work() as uow:
            return await uow.orders.find_by_status_older_than(OrderStatus.DELIVERY_IN_PROGRESS, NOW)

    assert [o.id for o in run_with_store(scenario, orders=orders)] == ["o1"]


def test_top_sales_ties_are_ordered_by_name():
    orders = [
        order_row("o1", datetime(2024, 1, 1, 10, 0)),
        order_row("o2", datetime(2024, 1, 1, 11, 0)),
        order_row("o3", datetime(2024, 1, 1, 12, 0), status=OrderStatus.CANCELLED),
    ]
    lines = [
        line_row("l1", "o1", "tea", 4),
        line_row("l2", "o1", "juice", 1),
        line_row("l3", "o2", "juice", 3),
        line_row("l4", "o2", "coffee", 4),
        line_row("l5", "o2", "bun", 2),
        line_row("l6", "o3", "bun", 9),
    ]

    async def scenario(unit_of_work):
        begin, end = day_bounds(datetime(2024, 1, 1).date())
        async with unit_of_work() as uow:
            return await uow.orders.top_sales_by_quantity(begin, end, limit=10)

    sales = run_with_store(scenario, orders=orders, lines=lines)

    assert [(s.name, s.quantity) for s in sales] == [
        ("coffee", 4), ("juice", 4), ("tea", 4), ("bun", 2)
    ]


def test_top_sales_respects_limit():
    orders = [order_row("o1", datetime(2024, 1, 1, 10, 0))]
    lines = [line_row(f"l{i}", "o1", f"dish-{i:02d}", i) for i in range(1, 13)]

    async def scenario(unit_of_work):
        begin, end = day_bounds(datetime(2024, 1, 1).date())
        async with unit_of_work() as uow:
            return await uow.orders.top_sales_by_quantity(begin, end, limit=10)

    sales = run_with_store(scenario, orders=orders, lines=lines)

    assert len(sales) == 10
    assert sales[0].name == "dish-12"
    assert sales[-1].name == "dish-03"
