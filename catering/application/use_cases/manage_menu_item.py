"""Menu item use cases: create and update with derived margin."""

from catering.application.dto.requests import CreateMenuItemRequest, UpdateMenuItemRequest
from catering.application.dto.responses import MenuItemResponse
from catering.config import get_logger
from catering.core.entities.menu import MenuItem, MenuItemIngredient, compute_margin_percent
from catering.core.exceptions import MenuItemNotFoundError
from catering.core.interfaces.menu_store import IMenuStore
from catering.core.interfaces.transaction import ITransactionManager

logger = get_logger(__name__)


class CreateMenuItemUseCase:
    """Create a menu item with its ingredient links; margin is computed."""

    def __init__(
        self,
        menu_store: IMenuStore | None = None,
        transaction_manager: ITransactionManager | None = None,
    ):
        self._menu_store = menu_store
        self._transaction_manager = transaction_manager

    async def _get_menu_store(self) -> IMenuStore:
        if self._menu_store is None:
            from catering.infrastructure.storage.sqlite import get_menu_store

            self._menu_store = await get_menu_store()
        return self._menu_store

    async def _get_transaction_manager(self) -> ITransactionManager:
        if self._transaction_manager is None:
            from catering.infrastructure.storage.sqlite import get_transaction_manager

            self._transaction_manager = await get_transaction_manager()
        return self._transaction_manager

    async def execute(self, business_id: int, request: CreateMenuItemRequest) -> MenuItem:
        margin = compute_margin_percent(request.selling_price, request.cost_per_serving)

        menu_item = MenuItem(
            business_id=business_id,
            name=request.name,
            description=request.description,
            category=request.category,
            cost_per_serving=request.cost_per_serving,
            selling_price=request.selling_price,
            margin_percent=margin,
            is_available=request.is_available,
            is_vegetarian=request.is_vegetarian,
            prep_time_minutes=request.prep_time_minutes,
            image_url=request.image_url,
            ingredients=[
                MenuItemIngredient(**ing.model_dump()) for ing in request.ingredients
            ],
        )

        store = await self._get_menu_store()
        tx = await self._get_transaction_manager()
        async with tx.transaction():
            menu_item = await store.create_menu_item(menu_item)

        return menu_item

    def to_response(self, menu_item: MenuItem) -> MenuItemResponse:
        return MenuItemResponse.from_entity(menu_item)


class UpdateMenuItemUseCase:
    """Partially update a menu item and recompute its margin."""

    def __init__(
        self,
        menu_store: IMenuStore | None = None,
        transaction_manager: ITransactionManager | None = None,
    ):
        self._menu_store = menu_store
        self._transaction_manager = transaction_manager

    async def _get_menu_store(self) -> IMenuStore:
        if self._menu_store is None:
            from catering.infrastructure.storage.sqlite import get_menu_store

            self._menu_store = await get_menu_store()
        return self._menu_store

    async def _get_transaction_manager(self) -> ITransactionManager:
        if self._transaction_manager is None:
            from catering.infrastructure.storage.sqlite import get_transaction_manager

            self._transaction_manager = await get_transaction_manager()
        return self._transaction_manager

    async def execute(
        self, business_id: int, menu_item_id: int, request: UpdateMenuItemRequest
    ) -> MenuItem:
        store = await self._get_menu_store()
        tx = await self._get_transaction_manager()

        async with tx.transaction():
            menu_item = await store.get_menu_item(business_id, menu_item_id)
            if menu_item is None:
                raise MenuItemNotFoundError(menu_item_id)

            changes = request.model_dump(
                exclude_unset=True,
                exclude_none=True,
                exclude={"cost_per_serving", "selling_price"},
            )
            for field_name, value in changes.items():
                setattr(menu_item, field_name, value)

            # Raises before any write if the merged price is not positive
            menu_item.reprice(
                cost_per_serving=request.cost_per_serving,
                selling_price=request.selling_price,
            )
            menu_item = await store.update_menu_item(menu_item)

        logger.info(
            "menu_item_repriced",
            menu_item_id=menu_item_id,
            margin_percent=menu_item.margin_percent,
        )
        return menu_item

    def to_response(self, menu_item: MenuItem) -> MenuItemResponse:
        return MenuItemResponse.from_entity(menu_item)
