"""CSV export of invoices."""
import csv
import io

from workhours.models.report import Invoice

CSV_HEADER = ["Date", "Heures", "Taux", "Montant", "Catégorie"]
UTF8_BOM = "\ufeff"


def _number(value: float) -> str:
    return f"{value:.2f}"


def invoice_to_csv(invoice: Invoice, bom: bool = True) -> str:
    """
    Render an invoice as semicolon-separated CSV.

    The BOM lets spreadsheet software detect UTF-8 so accented headers and
    categories display correctly.
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, delimiter=";", lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for line in invoice.lines:
        writer.writerow([
            line.date,
            _number(line.hours),
            _number(line.rate),
            _number(line.amount),
            line.category,
        ])
    writer.writerow(["Total", _number(invoice.total_hours), "", _number(invoice.total_amount), ""])

    content = buffer.getvalue()
    return UTF8_BOM + content if bom else content


def csv_filename(invoice: Invoice) -> str:
    """File name for an exported invoice."""
    return f"facture_{invoice.from_ or 'debut'}_{invoice.to or 'fin'}.csv"
