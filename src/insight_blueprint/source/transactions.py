"""Transactions source."""

from typing import Optional

from .base import CHAIN_ID_FIELD, BaseSource, Record


class Transaction(Record):
    """
    Transaction record.

    Post-execution fields (status, gas_used, receipts data...) are None for
    pending or not yet indexed transactions.
    """

    chain_id: Optional[int] = None
    hash: Optional[str] = None
    nonce: Optional[int] = None
    block_hash: Optional[str] = None
    block_number: Optional[int] = None
    block_timestamp: Optional[int] = None
    transaction_index: Optional[int] = None
    from_address: Optional[str] = None
    to_address: Optional[str] = None
    value: Optional[str] = None
    gas: Optional[int] = None
    gas_price: Optional[str] = None
    data: Optional[str] = None
    function_selector: Optional[str] = None
    max_fee_per_gas: Optional[str] = None
    max_priority_fee_per_gas: Optional[str] = None
    transaction_type: Optional[int] = None
    r: Optional[str] = None
    s: Optional[str] = None
    v: Optional[str] = None
    access_list: Optional[str] = None
    contract_address: Optional[str] = None
    gas_used: Optional[int] = None
    cumulative_gas_used: Optional[int] = None
    effective_gas_price: Optional[str] = None
    blob_gas_used: Optional[int] = None
    blob_gas_price: Optional[str] = None
    logs_bloom: Optional[str] = None
    status: Optional[int] = None


class TransactionsSource(BaseSource[Transaction]):
    """
    Source over the ``transactions`` resource.

    Use ``Source().transactions`` rather than constructing this directly.
    """

    path = "transactions"
    record_type = Transaction
    filter_fields = frozenset(Transaction.model_fields) - {CHAIN_ID_FIELD}
    sort_fields = frozenset(Transaction.model_fields)
