"""
Invoice Repository

Invoices live in their order's partition (sk = i#<invoiceId>) and are also
indexed on gsi1 by invoice id alone, so they can be fetched without knowing
the order.
"""

import logging
from typing import List, Optional

from ..identity import resolve_id
from ..keys import KeyPrefix, encode_key, iso_timestamp, strip_prefix
from ..mappers import invoice_mapper
from ..models import Invoice
from .base import SingleTableRepository

logger = logging.getLogger(__name__)


class InvoiceRepository(SingleTableRepository):

    def save_order_invoice(self, invoice: Invoice) -> Invoice:
        """
        Create or overwrite an invoice.

        Fills an id when absent, the date with now and payments with an
        empty list before writing.

        Returns:
            The saved invoice with defaults filled in
        """
        invoice = invoice.model_copy(update={
            'id': resolve_id(invoice.id, KeyPrefix.INVOICE),
            'order_id': strip_prefix(invoice.order_id, KeyPrefix.ORDER),
            'payments': invoice.payments if invoice.payments is not None else [],
            'date': invoice.date or iso_timestamp(),
        })
        self._put(invoice_mapper, invoice)
        logger.info(f"Saved invoice {invoice.id} for order {invoice.order_id}")
        return invoice

    def get_invoice_by_id(self, invoice_id: str) -> Optional[Invoice]:
        """
        Get an invoice by id.

        DynamoDB Operation: Query gsi1 gsi1_pk=i#<id> AND gsi1_sk=i#<id>
        """
        key = encode_key(invoice_id, KeyPrefix.INVOICE)
        return self._query_index_exact(invoice_mapper, 1, key, key)

    def get_invoice_by_order_id(self, order_id: str) -> Optional[Invoice]:
        """
        Get the first invoice of an order (lowest invoice id), or None.

        Use get_invoices_by_order_id() when an order may have several.
        """
        invoices = self.get_invoices_by_order_id(order_id)
        return invoices[0] if invoices else None

    def get_invoices_by_order_id(self, order_id: str) -> List[Invoice]:
        """
        Get all invoices of an order in invoice id order.

        DynamoDB Operation: Query pk=o#<orderId> AND begins_with(sk, 'i#')
        """
        return self._query_children(
            invoice_mapper,
            encode_key(order_id, KeyPrefix.ORDER),
            KeyPrefix.INVOICE.value
        )
