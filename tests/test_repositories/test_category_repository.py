"""Tests for CategoryRepository against a mocked AsyncSession."""

import uuid
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.dialects import postgresql
from sqlalchemy.ext.asyncio import AsyncSession

from catalog.models.category import Category
from catalog.repositories.category_repository import CategoryRepository


def compiled_sql(session: AsyncMock) -> str:
    """SQL text of the last statement passed to session.execute()."""
    stmt = session.execute.call_args.args[0]
    return str(stmt.compile(dialect=postgresql.dialect()))


@pytest.fixture
def mock_session() -> AsyncMock:
    return AsyncMock(spec=AsyncSession)


@pytest.fixture
def repo(mock_session: AsyncMock) -> CategoryRepository:
    return CategoryRepository(mock_session)


def scalars_result(rows: list) -> MagicMock:
    result = MagicMock()
    result.scalars.return_value.all.return_value = rows
    return result


class TestLookups:
    """Tests for single-row and list lookups."""

    @pytest.mark.asyncio
    async def test_get_returns_row(self, repo, mock_session):
        category = Category(id=uuid.uuid4(), name="Electronics")
        result = MagicMock()
        result.scalar_one_or_none.return_value = category
        mock_session.execute.return_value = result

        assert await repo.get(category.id) is category
        assert "WHERE product_categories.id = " in compiled_sql(mock_session)

    @pytest.mark.asyncio
    async def test_get_many_without_ids_skips_query(self, repo, mock_session):
        assert await repo.get_many([]) == {}
        mock_session.execute.assert_not_called()

    @pytest.mark.asyncio
    async def test_get_many_keys_by_id(self, repo, mock_session):
        a = Category(id=uuid.uuid4(), name="A")
        b = Category(id=uuid.uuid4(), name="B")
        mock_session.execute.return_value = scalars_result([a, b])

        assert await repo.get_many([a.id, b.id]) == {a.id: a, b.id: b}

    @pytest.mark.asyncio
    async def test_find_sibling_among_roots(self, repo, mock_session):
        result = MagicMock()
        result.scalar_one_or_none.return_value = None
        mock_session.execute.return_value = result

        assert await repo.find_sibling("Electronics", None) is None

        sql = compiled_sql(mock_session)
        assert "product_categories.parent_id IS NULL" in sql
        assert "product_categories.id !=" not in sql

    @pytest.mark.asyncio
    async def test_find_sibling_excludes_self(self, repo, mock_session):
        result = MagicMock()
        result.scalar_one_or_none.return_value = None
        mock_session.execute.return_value = result

        await repo.find_sibling("Phones", uuid.uuid4(), exclude_id=uuid.uuid4())

        sql = compiled_sql(mock_session)
        assert "product_categories.parent_id = " in sql
        assert "product_categories.id != " in sql

    @pytest.mark.asyncio
    async def test_list_children_of_groups_by_parent(self, repo, mock_session):
        parent_a, parent_b = uuid.uuid4(), uuid.uuid4()
        child = Category(id=uuid.uuid4(), name="Phones", parent_id=parent_a)
        mock_session.execute.return_value = scalars_result([child])

        grouped = await repo.list_children_of([parent_a, parent_b])

        assert grouped == {parent_a: [child], parent_b: []}

    @pytest.mark.asyncio
    async def test_find_all_filters_and_order(self, repo, mock_session):
        mock_session.execute.return_value = scalars_result([])

        await repo.find_all(search="pho", roots_only=True, order_by="created_at", descending=True)

        sql = compiled_sql(mock_session)
        assert "lower(product_categories.name) LIKE" in sql
        assert "product_categories.parent_id IS NULL" in sql
        assert "ORDER BY product_categories.created_at DESC" in sql

    @pytest.mark.asyncio
    @pytest.mark.parametrize(("search", "escaped"), [("A_B", "A/_B"), ("50%", "50/%")])
    async def test_find_all_search_matches_wildcards_literally(self, repo, mock_session, search, escaped):
        mock_session.execute.return_value = scalars_result([])

        await repo.find_all(search=search)

        stmt = mock_session.execute.call_args.args[0]
        compiled = stmt.compile(dialect=postgresql.dialect())
        assert "ESCAPE '/'" in str(compiled)
        assert escaped in compiled.params.values()

    @pytest.mark.asyncio
    async def test_parent_map(self, repo, mock_session):
        root, child = uuid.uuid4(), uuid.uuid4()
        result = MagicMock()
        result.all.return_value = [
            SimpleNamespace(id=root, parent_id=None),
            SimpleNamespace(id=child, parent_id=root),
        ]
        mock_session.execute.return_value = result

        assert await repo.parent_map() == {root: None, child: root}


class TestAggregates:
    """Tests for count queries."""

    @pytest.mark.asyncio
    async def test_count_children(self, repo, mock_session):
        result = MagicMock()
        result.scalar_one.return_value = 3
        mock_session.execute.return_value = result

        assert await repo.count_children(uuid.uuid4()) == 3
        assert "count(*)" in compiled_sql(mock_session)

    @pytest.mark.asyncio
    async def test_count_products_by_category_fills_zeros(self, repo, mock_session):
        with_products, empty = uuid.uuid4(), uuid.uuid4()
        result = MagicMock()
        result.all.return_value = [(with_products, 4)]
        mock_session.execute.return_value = result

        counts = await repo.count_products_by_category([with_products, empty])

        assert counts == {with_products: 4, empty: 0}
        assert "GROUP BY products.category_id" in compiled_sql(mock_session)


class TestWrites:
    """Tests for insert, update and delete."""

    @pytest.mark.asyncio
    async def test_create_flushes_and_refreshes(self, repo, mock_session):
        parent_id = uuid.uuid4()

        category = await repo.create(name="Phones", parent_id=parent_id)

        assert category.name == "Phones"
        assert category.parent_id == parent_id
        mock_session.add.assert_called_once_with(category)
        mock_session.flush.assert_awaited_once()
        mock_session.refresh.assert_awaited_once_with(category)

    @pytest.mark.asyncio
    async def test_update_sets_fields(self, repo, mock_session):
        category = Category(id=uuid.uuid4(), name="Phones", parent_id=uuid.uuid4())

        updated = await repo.update(category, name="Mobile", parent_id=None)

        assert updated.name == "Mobile"
        assert updated.parent_id is None
        mock_session.flush.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_delete(self, repo, mock_session):
        await repo.delete(uuid.uuid4())

        assert compiled_sql(mock_session).startswith("DELETE FROM product_categories")
        mock_session.flush.assert_awaited_once()
