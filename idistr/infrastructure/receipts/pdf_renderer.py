"""
Receipt PDF renderer using fpdf2.

Builds a single-page receipt with the store block, the line table and the
payment footer. Cyrillic text needs a TTF font (``RECEIPT_FONT_PATH``);
without one the built-in Helvetica is used and characters outside
Latin-1 are replaced.
"""

import os

from fpdf import FPDF
from fpdf.enums import XPos, YPos

from idistr.config import get_logger
from idistr.config.settings import ReceiptSettings, get_settings
from idistr.core.entities import Receipt
from idistr.core.interfaces.receipt import IReceiptRenderer
from idistr.infrastructure.receipts.html_renderer import format_amount

logger = get_logger(__name__)

UNICODE_FONT = "ReceiptFont"

# (label, width in mm, alignment)
_COLUMNS = [
    ("#", 10, "C"),
    ("product", 70, "L"),
    ("sku", 30, "L"),
    ("qty", 20, "R"),
    ("price", 30, "R"),
    ("amount", 30, "R"),
]

# Russian labels need the TTF font; Helvetica gets the Latin ones.
_LABELS = {
    "#": ("#", "#"),
    "product": ("Товар", "Product"),
    "sku": ("SKU", "SKU"),
    "qty": ("Кол-во", "Qty"),
    "price": ("Цена", "Price"),
    "amount": ("Сумма", "Amount"),
    "total": ("Итого", "Total"),
    "phone": ("Тел", "Tel"),
    "bin": ("БИН/ИИН", "BIN/IIN"),
    "payment": ("Метод оплаты", "Payment"),
    "order": ("Заказ №", "Order"),
    "receipt": ("Чек", "Slip"),
    "note": ("Примечание", "Note"),
    "title": (None, "SALES RECEIPT"),
}


class _ReceiptPdf(FPDF):
    """FPDF subclass with the order id in the footer."""

    def __init__(self, order_id: str, family: str) -> None:
        super().__init__()
        self._order_id = order_id
        self._family = family

    def footer(self) -> None:
        self.set_y(-15)
        self.set_font(self._family, "", 8)
        self.cell(0, 5, f"#{self._order_id}", align="R")


class PdfReceiptRenderer(IReceiptRenderer):
    """Renders receipts as PDF documents."""

    media_type = "application/pdf"

    def __init__(self, receipt_settings: ReceiptSettings | None = None) -> None:
        if receipt_settings is None:
            receipt_settings = get_settings().receipt
        self._settings = receipt_settings
        self._unicode_font_loaded = False

    def render(self, receipt: Receipt) -> bytes:
        pdf = self._new_document(receipt.order_id)
        pdf.set_auto_page_break(auto=True, margin=20)
        pdf.add_page()

        self._render_header(pdf, receipt)
        self._render_items_table(pdf, receipt)
        self._render_footer_block(pdf, receipt)

        return bytes(pdf.output())

    # ------------------------------------------------------------------
    # Fonts
    # ------------------------------------------------------------------

    def _new_document(self, order_id: str) -> _ReceiptPdf:
        font_path = self._settings.font_path
        self._unicode_font_loaded = bool(font_path) and os.path.isfile(font_path)
        family = UNICODE_FONT if self._unicode_font_loaded else "Helvetica"

        pdf = _ReceiptPdf(order_id, family)
        if self._unicode_font_loaded:
            try:
                pdf.add_font(UNICODE_FONT, "", font_path)
                pdf.add_font(UNICODE_FONT, "B", font_path)
            except Exception as e:
                logger.warning("receipt_font_load_failed", font_path=font_path, error=str(e))
                self._unicode_font_loaded = False
                pdf = _ReceiptPdf(order_id, "Helvetica")
        return pdf

    def _font(self, pdf: FPDF, style: str = "", size: int = 10) -> None:
        family = UNICODE_FONT if self._unicode_font_loaded else "Helvetica"
        pdf.set_font(family, style, size)

    def _label(self, key: str) -> str:
        ru, latin = _LABELS[key]
        if self._unicode_font_loaded:
            return ru or self._settings.title
        return latin

    def _safe_text(self, text: str) -> str:
        """Return *text* safe for the current font."""
        if self._unicode_font_loaded:
            return text
        return text.encode("latin-1", errors="replace").decode("latin-1")

    # ------------------------------------------------------------------
    # Sections
    # ------------------------------------------------------------------

    def _render_header(self, pdf: FPDF, receipt: Receipt) -> None:
        self._font(pdf, "B", 16)
        title = f"{self._label('title')} ({receipt.payment.method.value})"
        pdf.cell(
            0, 10, self._safe_text(title), align="C",
            new_x=XPos.LMARGIN, new_y=YPos.NEXT,
        )
        self._font(pdf, "", 9)
        pdf.cell(
            0, 5, receipt.issued_at.strftime("%d.%m.%Y, %H:%M:%S"), align="C",
            new_x=XPos.LMARGIN, new_y=YPos.NEXT,
        )
        pdf.ln(3)

        store = receipt.store
        if store is None:
            return
        self._font(pdf, "B", 10)
        pdf.cell(
            0, 6, self._safe_text(store.name),
            new_x=XPos.LMARGIN, new_y=YPos.NEXT,
        )
        self._font(pdf, "", 9)
        for text in (
            store.address,
            f"{self._label('phone')}: {store.phone}" if store.phone else "",
            f"{self._label('bin')}: {store.bin_iin}" if store.bin_iin else "",
        ):
            if text:
                pdf.cell(
                    0, 5, self._safe_text(text),
                    new_x=XPos.LMARGIN, new_y=YPos.NEXT,
                )
        pdf.ln(3)

    def _render_items_table(self, pdf: FPDF, receipt: Receipt) -> None:
        self._font(pdf, "B", 9)
        pdf.set_fill_color(230, 230, 230)
        for key, width, align in _COLUMNS:
            pdf.cell(width, 7, self._label(key), border=1, align=align, fill=True)
        pdf.ln()

        self._font(pdf, "", 9)
        for i, line in enumerate(receipt.lines, start=1):
            fill = i % 2 == 0
            if fill:
                pdf.set_fill_color(245, 245, 245)
            values = [
                str(i),
                self._safe_text(line.title)[:45],
                self._safe_text(line.sku)[:18],
                str(line.qty),
                format_amount(line.price),
                format_amount(line.subtotal),
            ]
            for value, (_, width, align) in zip(values, _COLUMNS):
                pdf.cell(width, 6, value, border=1, align=align, fill=fill)
            pdf.ln()

        label_width = sum(width for _, width, _ in _COLUMNS[:-1])
        self._font(pdf, "B", 10)
        pdf.cell(label_width, 8, self._label("total"), border=1, align="R")
        pdf.cell(
            _COLUMNS[-1][1], 8,
            f"{format_amount(receipt.total)} {self._settings.currency}",
            border=1, align="R",
            new_x=XPos.LMARGIN, new_y=YPos.NEXT,
        )

    def _payment_line(self, receipt: Receipt) -> str:
        """Payment method, order number and, when given, the slip reference."""
        parts = [
            f"{self._label('payment')}: {receipt.payment.method.value}",
            f"{self._label('order')}: {receipt.order_id}",
        ]
        if receipt.payment.txn:
            parts.append(f"{self._label('receipt')}: {receipt.payment.txn}")
        return " | ".join(parts)

    def _render_footer_block(self, pdf: FPDF, receipt: Receipt) -> None:
        pdf.ln(4)
        self._font(pdf, "", 9)
        pdf.cell(
            0, 5,
            self._safe_text(self._payment_line(receipt)),
            new_x=XPos.LMARGIN, new_y=YPos.NEXT,
        )
        if receipt.note:
            pdf.multi_cell(0, 5, self._safe_text(f"{self._label('note')}: {receipt.note}"))
