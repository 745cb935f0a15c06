from io import BytesIO

from openpyxl import Workbook


def product(code: str, price: str = "9.90", **extra) -> dict:
    return {"code": code, "description": f"Product {code}", "price": price, **extra}


def group(*codes: str, type: str = "single", position: int = 0, **extra) -> dict:
    return {
        "type": type,
        "title": f"Group {position}",
        "position": position,
        "products": [product(c) for c in codes],
        **extra,
    }


def project_payload(name: str = "Weekly promo", groups: list | None = None, **extra) -> dict:
    return {
        "name": name,
        "config": {
            "title": "Ofertas",
            "headerText": "Only this week",
            "footerText": "While stocks last",
            "backgroundColor": "#ffffff",
            "primaryColor": "#ff0000",
            "secondaryColor": "#000000",
        },
        "groups": groups if groups is not None else [group("ABC123", "XYZ9")],
        **extra,
    }


def xlsx_bytes(rows: list[list]) -> bytes:
    """
    Build an .xlsx file with a header row followed by `rows`.
    """
    wb = Workbook()
    ws = wb.active
    ws.append(["Codigo", "Titulo", "Preco"])
    for row in rows:
        ws.append(row)
    buf = BytesIO()
    wb.save(buf)
    return buf.getvalue()
