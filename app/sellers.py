from app.exceptions import SellerNotFoundError
from app.log import get_logger
from app.mappers import (
    apply_seller_update,
    to_seller_entity,
    to_seller_response,
    to_transaction_response,
)
from app.models import Seller, SellerRequest, SellerResponse, TransactionResponse
from app.store import DataStore
from app.validation import EntityValidator

logger = get_logger("litecrm.sellers")


def find_seller(store: DataStore, seller_id: int) -> Seller:
    seller = store.get_seller(seller_id)
    if seller is None:
        raise SellerNotFoundError(seller_id)
    return seller


def get_all_sellers(store: DataStore) -> list[SellerResponse]:
    logger.info("finding all sellers")
    with store.reading():
        responses = [to_seller_response(s) for s in store.list_sellers()]
    logger.info("successfully found %d sellers", len(responses))
    return responses


def get_seller(store: DataStore, seller_id: int) -> SellerResponse:
    logger.info("getting a seller by id: %s", seller_id)
    with store.reading():
        return to_seller_response(find_seller(store, seller_id))


def create_seller(
    store: DataStore,
    validator: EntityValidator,
    request: SellerRequest,
) -> SellerResponse:
    logger.info("creating a new seller")
    seller = to_seller_entity(request)
    validator.check(seller)
    with store.atomic():
        store.add_seller(seller)
        response = to_seller_response(seller)
    logger.info("successfully created a new seller with id: %s", response.id)
    return response


def update_seller(
    store: DataStore,
    validator: EntityValidator,
    seller_id: int,
    request: SellerRequest,
) -> SellerResponse:
    """Apply the fields present in ``request``; absent fields keep their values."""
    logger.info("updating a seller with id: %s", seller_id)
    with store.atomic():
        seller = find_seller(store, seller_id)
        apply_seller_update(request, seller)
        validator.check(seller)
        response = to_seller_response(seller)
    logger.info("successfully updated a seller with id: %s", seller_id)
    return response


def delete_seller(store: DataStore, seller_id: int) -> None:
    logger.info("deleting a seller with id: %s", seller_id)
    with store.atomic():
        seller = find_seller(store, seller_id)
        removed = store.delete_seller(seller)
    logger.info(
        "successfully deleted a seller with id: %s and %d of its transactions",
        seller_id,
        removed,
    )


def get_seller_transactions(store: DataStore, seller_id: int) -> list[TransactionResponse]:
    logger.info("getting transactions of a seller with id: %s", seller_id)
    with store.reading():
        find_seller(store, seller_id)
        responses = [to_transaction_response(t) for t in store.get_transactions_for_seller(seller_id)]
    logger.info("successfully found %d transactions of seller %s", len(responses), seller_id)
    return responses
