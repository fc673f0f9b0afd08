"""
HTML receipt renderer.

Produces a standalone printable page (inline styles, no external assets
besides the logo) that asks the browser to print itself on load.
"""

from html import escape

from idistr.config.settings import ReceiptSettings, get_settings
from idistr.core.entities import Receipt
from idistr.core.interfaces.receipt import IReceiptRenderer

_STYLE = """
  body { font-family: -apple-system, Segoe UI, Roboto, Arial, sans-serif; margin: 24px; color: #111; }
  .head { display: flex; gap: 16px; align-items: center; }
  .head img { width: 64px; height: 64px; object-fit: cover; border-radius: 8px; }
  h1 { font-size: 20px; margin: 0; }
  .badge { display: inline-block; font-size: 11px; padding: 2px 8px; border: 1px solid #111; border-radius: 999px; margin-left: 8px; }
  .muted { color: #666; font-size: 12px; }
  table { width: 100%; border-collapse: collapse; margin-top: 16px; }
  th, td { border-bottom: 1px solid #ddd; padding: 6px 4px; font-size: 13px; text-align: left; }
  td.num, th.num { text-align: right; }
  tfoot td { font-weight: 700; border-top: 2px solid #111; }
  .meta { margin-top: 12px; font-size: 13px; }
  @media print { body { margin: 8mm; } }
"""


def format_amount(value: float) -> str:
    """Group thousands with spaces: 12500.0 -> '12 500'."""
    rounded = round(value, 2)
    if float(rounded).is_integer():
        text = f"{int(rounded):,}"
    else:
        text = f"{rounded:,.2f}"
    return text.replace(",", " ")


class HtmlReceiptRenderer(IReceiptRenderer):
    """Renders receipts as a self-printing HTML document."""

    media_type = "text/html; charset=utf-8"

    def __init__(self, receipt_settings: ReceiptSettings | None = None) -> None:
        if receipt_settings is None:
            receipt_settings = get_settings().receipt
        self._settings = receipt_settings

    def render(self, receipt: Receipt) -> bytes:
        return self.render_text(receipt).encode("utf-8")

    def render_text(self, receipt: Receipt) -> str:
        title = escape(self._settings.title)
        store = receipt.store
        store_block = ""
        if store is not None:
            parts = [f"<div><b>{escape(store.name)}</b></div>"]
            if store.address:
                parts.append(f'<div class="muted">{escape(store.address)}</div>')
            contacts = []
            if store.phone:
                contacts.append(f"Тел: {escape(store.phone)}")
            if store.bin_iin:
                contacts.append(f"БИН/ИИН: {escape(store.bin_iin)}")
            if contacts:
                parts.append(f'<div class="muted">{" • ".join(contacts)}</div>')
            store_block = "\n".join(parts)

        rows = "\n".join(
            "<tr>"
            f"<td>{i}</td>"
            f"<td>{escape(line.title)}</td>"
            f"<td>{escape(line.sku)}</td>"
            f'<td class="num">{line.qty}</td>'
            f'<td class="num">{format_amount(line.price)}</td>'
            f'<td class="num">{format_amount(line.subtotal)}</td>'
            "</tr>"
            for i, line in enumerate(receipt.lines, start=1)
        )

        note_block = ""
        if receipt.note:
            note_block = f'<div class="meta">Примечание: {escape(receipt.note)}</div>'

        payment_line = (
            f"Метод оплаты: {escape(receipt.payment.method.value)} • "
            f"Заказ №: {escape(receipt.order_id)}"
        )
        if receipt.payment.txn:
            payment_line += f" • Чек: {escape(receipt.payment.txn)}"

        issued = receipt.issued_at.strftime("%d.%m.%Y, %H:%M:%S")
        currency = escape(self._settings.currency)

        return f"""<!doctype html>
<html lang="ru">
<head>
<meta charset="utf-8">
<title>{title} № {escape(receipt.order_id)}</title>
<style>{_STYLE}</style>
</head>
<body>
<div class="head">
  <img src="{escape(self._settings.logo_url, quote=True)}" alt="">
  <div>
    <h1>{title}<span class="badge">{escape(receipt.payment.method.value)}</span></h1>
    <div class="muted">{issued}</div>
  </div>
</div>
<div class="meta">{store_block}</div>
<table>
<thead>
<tr><th>#</th><th>Товар</th><th>SKU</th><th class="num">Кол-во</th><th class="num">Цена</th><th class="num">Сумма</th></tr>
</thead>
<tbody>
{rows}
</tbody>
<tfoot>
<tr><td colspan="5">Итого</td><td class="num">{format_amount(receipt.total)} {currency}</td></tr>
</tfoot>
</table>
<div class="meta">{payment_line}</div>
{note_block}
<script>window.print()</script>
</body>
</html>
"""
