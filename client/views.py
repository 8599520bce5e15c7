# client/views.py
"""
Presentation state for the finance tracker client.

Everything here is derived from the transaction list held by the data
layer; nothing talks to the network.
"""
from dataclasses import dataclass, field
from datetime import date as _date
from typing import List, Optional

CATEGORIES = ["Food", "Bills", "Salary", "Travel", "Shopping", "Other"]
ALL = "All"

NEWEST = "newest"
OLDEST = "oldest"

DASHBOARD, ADD, EDIT = "dashboard", "add", "edit"


@dataclass
class Totals:
    income: float = 0.0
    expenses: float = 0.0
    balance: float = 0.0


def compute_totals(transactions) -> Totals:
    # sign decides: > 0 is income, everything else (zero included) is an expense
    income = sum(t["amount"] for t in transactions if t["amount"] > 0)
    expenses = sum(t["amount"] for t in transactions if not t["amount"] > 0)
    return Totals(income=float(income), expenses=float(expenses), balance=float(income + expenses))


def _day(value) -> str:
    # ISO strings compare correctly once cut to the day
    return value.isoformat()[:10] if isinstance(value, _date) else str(value)[:10]


def filter_and_sort(transactions, category: str = ALL, order: str = NEWEST) -> list:
    if order not in (NEWEST, OLDEST):
        raise ValueError(f"Unknown sort order: {order}")
    kept = [t for t in transactions if category == ALL or t.get("category") == category]
    return sorted(kept, key=lambda t: _day(t["date"]), reverse=order == NEWEST)


def format_amount(amount: float) -> str:
    return f"${amount:.2f}"


@dataclass
class TransactionRow:
    id: str
    title: str
    category: str
    date: str
    amount: str
    is_income: bool

    @classmethod
    def from_transaction(cls, t: dict) -> "TransactionRow":
        return cls(
            id=t["id"],
            title=t["title"],
            category=t["category"],
            date=_day(t["date"]),
            amount=format_amount(abs(t["amount"])),
            is_income=t["amount"] > 0,
        )


@dataclass
class Dashboard:
    """Everything the dashboard page shows, built from the data layer state."""

    totals: Totals
    rows: List[TransactionRow]
    insights_enabled: bool
    goals_enabled: bool
    insight_text: str = ""
    goal_text: str = ""
    category_filter: str = ALL
    sort_order: str = NEWEST

    EMPTY_TEXT = "No transactions found. Add one to get started!"

    @classmethod
    def build(cls, client, category_filter: str = ALL, sort_order: str = NEWEST) -> "Dashboard":
        visible = filter_and_sort(client.transactions, category_filter, sort_order)
        return cls(
            totals=Totals(client.income, client.expenses, client.balance),
            rows=[TransactionRow.from_transaction(t) for t in visible],
            insights_enabled=not client.is_loading_insight and len(client.transactions) > 0,
            goals_enabled=not client.is_loading_goal,
            insight_text=client.insight_text,
            goal_text=client.goal_text,
            category_filter=category_filter,
            sort_order=sort_order,
        )


def render_dashboard(dashboard: Dashboard) -> str:
    lines = [
        f"Total Balance:  {format_amount(dashboard.totals.balance)}",
        f"Total Income:   {format_amount(dashboard.totals.income)}",
        f"Total Expenses: {format_amount(dashboard.totals.expenses)}",
        "",
    ]
    if dashboard.insight_text:
        lines += ["Your Financial Insights", dashboard.insight_text, ""]
    if dashboard.goal_text:
        lines += ["Your Next Financial Goal", dashboard.goal_text, ""]
    if not dashboard.rows:
        lines.append(Dashboard.EMPTY_TEXT)
    for row in dashboard.rows:
        sign = "+" if row.is_income else "-"
        lines.append(f"{row.date}  {row.title} [{row.category}]  {sign}{row.amount}")
    return "\n".join(lines)


class FormError(ValueError):
    pass


@dataclass
class TransactionForm:
    """Add/edit form. ``transaction`` is set when editing an existing record."""

    transaction: Optional[dict] = None
    title: str = ""
    amount: str = ""
    date: str = ""
    category: Optional[str] = None

    def __post_init__(self):
        t = self.transaction or {}
        self.title = self.title or t.get("title", "")
        if not self.amount and t.get("amount") is not None:
            self.amount = str(t["amount"])
        self.date = self.date or (_day(t["date"]) if t.get("date") else _date.today().isoformat())
        self.category = self.category or t.get("category", CATEGORIES[0])

    @property
    def heading(self) -> str:
        return "Edit Transaction" if self.transaction else "Add New Transaction"

    def submit(self) -> dict:
        """Return the payload to save, or raise FormError when a field is blank."""
        if not self.title or not self.amount or not self.date or not self.category:
            raise FormError("Please fill out all fields.")
        try:
            amount = float(self.amount)
        except ValueError:
            raise FormError("Please fill out all fields.")
        payload = dict(self.transaction or {})
        payload.update(title=self.title, amount=amount, date=self.date, category=self.category)
        return payload


@dataclass
class MessageBanner:
    text: str = ""

    @property
    def visible(self) -> bool:
        return bool(self.text)

    def show(self, text: str):
        self.text = text

    def dismiss(self):
        self.text = ""


@dataclass
class DeleteConfirmation:
    transaction: Optional[dict] = None

    @property
    def is_open(self) -> bool:
        return self.transaction is not None

    @property
    def prompt(self) -> str:
        title = (self.transaction or {}).get("title", "")
        return f'Are you sure you want to delete the transaction "{title}"? This action cannot be undone.'

    def request(self, transaction: dict):
        self.transaction = transaction

    def cancel(self):
        self.transaction = None

    async def confirm(self, client) -> bool:
        if self.transaction is None:
            return False
        deleted = await client.delete_transaction(self.transaction["id"])
        if deleted:
            self.transaction = None
        return deleted


@dataclass
class AppState:
    """Page navigation plus the selected transaction for edit/delete."""

    client: object
    page: str = DASHBOARD
    selected: Optional[dict] = None
    category_filter: str = ALL
    sort_order: str = NEWEST
    banner: MessageBanner = field(default_factory=MessageBanner)
    delete_modal: DeleteConfirmation = field(default_factory=DeleteConfirmation)

    def dashboard(self) -> Dashboard:
        return Dashboard.build(self.client, self.category_filter, self.sort_order)

    def go_dashboard(self):
        self.page = DASHBOARD

    def go_add(self):
        self.page = ADD
        self.selected = None

    def go_edit(self, transaction: dict):
        self.selected = transaction
        self.page = EDIT

    def form(self) -> TransactionForm:
        return TransactionForm(transaction=self.selected if self.page == EDIT else None)

    def open_delete(self, transaction: dict):
        self.selected = transaction
        self.delete_modal.request(transaction)

    def close_delete(self):
        self.delete_modal.cancel()
        self.selected = None

    async def save(self, form: TransactionForm) -> bool:
        try:
            payload = form.submit()
        except FormError as e:
            self.banner.show(str(e))
            return False
        if form.transaction:
            ok = await self.client.update_transaction(payload)
        else:
            ok = await self.client.add_transaction(payload)
        self._sync_banner()
        if ok:
            self.go_dashboard()
        return ok

    async def confirm_delete(self) -> bool:
        ok = await self.delete_modal.confirm(self.client)
        self._sync_banner()
        if ok:
            self.selected = None
        return ok

    async def refresh(self) -> bool:
        ok = await self.client.fetch_transactions()
        self._sync_banner()
        return ok

    async def request_insights(self) -> bool:
        if not self.dashboard().insights_enabled:
            return False
        ok = await self.client.get_financial_insights()
        self._sync_banner()
        return ok

    async def request_goal(self) -> bool:
        ok = await self.client.get_financial_goals()
        self._sync_banner()
        return ok

    def dismiss_message(self):
        self.banner.dismiss()
        self.client.message = ""

    def _sync_banner(self):
        if self.client.message:
            self.banner.show(self.client.message)
