from app.exceptions import MissingSellerReferenceError, TransactionNotFoundError
from app.log import get_logger
from app.mappers import (
    apply_transaction_update,
    to_transaction_entity,
    to_transaction_response,
)
from app.models import Transaction, TransactionRequest, TransactionResponse
from app.relations import link, relink
from app.sellers import find_seller
from app.store import DataStore
from app.validation import EntityValidator

logger = get_logger("litecrm.transactions")


def find_transaction(store: DataStore, txn_id: int) -> Transaction:
    txn = store.get_transaction(txn_id)
    if txn is None:
        raise TransactionNotFoundError(txn_id)
    return txn


def get_all_transactions(store: DataStore) -> list[TransactionResponse]:
    logger.info("finding all transactions")
    with store.reading():
        responses = [to_transaction_response(t) for t in store.list_transactions()]
    logger.info("successfully found %d transactions", len(responses))
    return responses


def get_transaction(store: DataStore, txn_id: int) -> TransactionResponse:
    logger.info("finding a transaction by id: %s", txn_id)
    with store.reading():
        return to_transaction_response(find_transaction(store, txn_id))


def create_transaction(
    store: DataStore,
    validator: EntityValidator,
    request: TransactionRequest,
) -> TransactionResponse:
    logger.info("trying to create a new transaction")
    if request.seller_id is None:
        raise MissingSellerReferenceError()

    txn = to_transaction_entity(request)
    with store.atomic():
        seller = find_seller(store, request.seller_id)
        store.add_transaction(txn)
        link(seller, txn)
        # rolled back with the insert if anything is invalid
        validator.check(txn)
        response = to_transaction_response(txn)
    logger.info(
        "successfully created a new transaction with id: %s for seller: %s",
        response.id,
        response.seller_id,
    )
    return response


def update_transaction(
    store: DataStore,
    validator: EntityValidator,
    txn_id: int,
    request: TransactionRequest,
) -> TransactionResponse:
    """Partial update. A different ``seller_id`` moves the transaction to
    that seller; an unsent one leaves the seller unchanged."""
    logger.info("updating a transaction with id: %s", txn_id)
    fields = request.model_fields_set
    with store.atomic():
        txn = find_transaction(store, txn_id)
        apply_transaction_update(request, txn)

        if "seller_id" in fields:
            if request.seller_id is None:
                raise MissingSellerReferenceError()
            if request.seller_id != txn.seller_id:
                new_seller = find_seller(store, request.seller_id)
                old_seller = find_seller(store, txn.seller_id)
                logger.info(
                    "moving transaction %s from seller %s to seller %s",
                    txn_id,
                    old_seller.id,
                    new_seller.id,
                )
                relink(old_seller, new_seller, txn)

        validator.check(txn)
        response = to_transaction_response(txn)
    logger.info("successfully updated a transaction with id: %s", txn_id)
    return response


def delete_transaction(store: DataStore, txn_id: int) -> None:
    logger.info("deleting a transaction with id: %s", txn_id)
    with store.atomic():
        txn = find_transaction(store, txn_id)
        store.delete_transaction(txn)
    logger.info("successfully deleted a transaction with id: %s", txn_id)
