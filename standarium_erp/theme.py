"""
Theme constants: colors, labels, chart layout.
Import from here instead of hardcoding colors anywhere.
"""

# ── Color Palette ────────────────────────────────────────────────────────────
BG = "#111827"
CARD = "#1f2937"
SKY = "#0ea5e9"
ORANGE = "#f97316"
GREEN = "#10b981"
YELLOW = "#eab308"
PURPLE = "#a855f7"
RED = "#ef4444"
WHITE = "#ffffff"
GRAY = "#9ca3af"
DARKGRAY = "#6b7280"

# ── Status / kind labels and colors ──────────────────────────────────────────
STATUS_LABELS = {
    "in-stock": "Em Estoque",
    "in-transit": "Em Trânsito",
    "sold": "Vendido",
    "not-applicable": "N/A",
}

STATUS_COLORS = {
    "in-stock": SKY,
    "in-transit": YELLOW,
    "sold": GRAY,
    "not-applicable": PURPLE,
}

KIND_LABELS = {
    "for-sale": "Produto para Venda",
    "consumption": "Consumo",
}

METHOD_COLORS = [SKY, ORANGE, GREEN, DARKGRAY]

PERIOD_OPTIONS = [
    {"label": "Todo o Período", "value": "all_time"},
    {"label": "Este Mês", "value": "this_month"},
    {"label": "Últimos 30 Dias", "value": "last_30_days"},
]

REPORT_OPTIONS = [
    {"label": "Vendas", "value": "sales"},
    {"label": "Compras", "value": "purchases"},
    {"label": "Estoque Atual", "value": "stock"},
]

# ── Plotly Chart Layout ──────────────────────────────────────────────────────
CHART_LAYOUT = dict(
    template="plotly_dark",
    paper_bgcolor="rgba(0,0,0,0)",
    plot_bgcolor="rgba(0,0,0,0)",
    font={"color": "#d1d5db"},
    margin=dict(t=50, b=30, l=60, r=20),
)

# ── Toast placement ──────────────────────────────────────────────────────────
TOAST_STYLE = {"position": "fixed", "top": 20, "right": 20, "zIndex": 9999}

# ── Layout ───────────────────────────────────────────────────────────────────
SIDEBAR_WIDTH = "250px"
CONTENT_MARGIN = "266px"  # sidebar + gap
