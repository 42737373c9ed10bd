"""Finance tracker GUI application using NiceGUI."""

from dataclasses import replace
from datetime import datetime
from typing import Optional

import plotly.graph_objects as go
from nicegui import ui
from pydantic import ValidationError

from finance_tracker.config import settings
from finance_tracker.formatting import (
    category_colors,
    empty_list_message,
    format_balance,
    format_money,
    format_signed_amount,
    long_date,
    short_date,
)
from finance_tracker.models import Transaction, TransactionCreate, TransactionType
from finance_tracker.services import (
    AnalyticsService,
    LocalAuthProvider,
    RemoteSyncAdapter,
    SessionGate,
    SessionStatus,
    TransactionFilter,
    TransactionService,
    TransactionStore,
    category_options,
    filter_transactions,
)
from finance_tracker.services.filter_service import ALL
from finance_tracker.services.remote_sync import TransactionCollection

PLACEHOLDER_SECTIONS = [
    ('Budgets', 'account_balance_wallet',
     'Set spending limits for different categories and track your progress throughout the month.'),
    ('Goals', 'flag',
     'Set savings targets and track your progress towards achieving your financial objectives.'),
    ('Reports', 'pie_chart',
     'Generate detailed reports and insights about your spending patterns and financial trends.'),
    ('Settings', 'settings',
     'Customize your experience, manage categories, and configure your preferences.'),
]


class App:
    """Main application frontend for one browser session."""

    def __init__(
        self,
        auth: Optional[LocalAuthProvider] = None,
        collection: Optional[TransactionCollection] = None,
    ):
        """Initialize the application."""
        # Session state, one set per client
        self.store = TransactionStore()
        self.transaction_service = TransactionService(
            self.store, RemoteSyncAdapter(collection)
        )
        self.analytics_service = AnalyticsService()
        self.auth = auth or LocalAuthProvider()
        self.session_gate = SessionGate(
            self.auth, self.transaction_service, on_change=self.refresh_all
        )

        # UI State
        self.criteria = TransactionFilter()
        self.active_tab = 'Dashboard'

        # Build UI
        self._setup_styles()
        self.content()

    async def start(self):
        """Wire the session gate to the auth provider."""
        await self.session_gate.start()

    def _setup_styles(self):
        """Setup custom styles and colors."""
        ui.colors(primary='#38bdf8', secondary='#0ea5e9', accent='#0369a1')
        ui.query('body').style('background-color: #0f172a; color: #f8fafc;')

    @ui.refreshable
    def content(self):
        """Render the view for the current session status."""
        status = self.session_gate.status
        if status == SessionStatus.LOADING:
            self._build_loading()
        elif status == SessionStatus.UNAUTHENTICATED:
            self._build_sign_in()
        else:
            self._build_ui()

    def _build_loading(self):
        with ui.column().classes('w-full h-screen items-center justify-center'):
            ui.spinner(size='xl')
            ui.label('Loading...').classes('text-slate-400 mt-4')

    def _build_sign_in(self):
        """Build the landing view for signed-out users."""
        with ui.column().classes('w-full h-screen items-center justify-center'):
            with ui.column().classes('max-w-md items-center gap-6 p-6'):
                ui.label(settings.app_title).classes('text-4xl font-bold text-sky-400')
                ui.label('Take control of your finances').classes('text-xl text-slate-400')
                with ui.column().classes('gap-2'):
                    for feature in (
                        'Track income and expenses',
                        'Set and monitor budgets',
                        'Visualize your financial data',
                    ):
                        with ui.row().classes('items-center gap-3'):
                            ui.icon('circle', size='8px').classes('text-sky-400')
                            ui.label(feature).classes('text-slate-400')
                ui.button('Sign In to Get Started', on_click=self.auth.login).classes('w-full')

    def _build_ui(self):
        """Construct the layout."""
        user = self.session_gate.user
        with ui.row().classes('w-full items-center justify-between bg-slate-900 border-b border-slate-700 p-4'):
            ui.label(settings.app_title).classes('text-2xl font-bold text-sky-400')
            with ui.row().classes('items-center gap-4'):
                ui.label(user.label).classes('text-slate-400')
                ui.button('Sign Out', on_click=self.auth.logout, icon='logout').props('flat color=white')

        with ui.tabs().classes('w-full bg-slate-900 text-slate-400').bind_value(self, 'active_tab') as tabs:
            dashboard_tab = ui.tab('Dashboard', icon='dashboard')
            transactions_tab = ui.tab('Transactions', icon='credit_card')
            placeholder_tabs = [ui.tab(name, icon=icon) for name, icon, _ in PLACEHOLDER_SECTIONS]

        with ui.tab_panels(tabs, value=self.active_tab).classes('w-full grow bg-transparent'):
            with ui.tab_panel(dashboard_tab):
                self._build_dashboard_tab()
            with ui.tab_panel(transactions_tab):
                self._build_transactions_tab()
            for tab, (name, icon, blurb) in zip(placeholder_tabs, PLACEHOLDER_SECTIONS):
                with ui.tab_panel(tab):
                    self._build_placeholder(name, icon, blurb)

    def _build_dashboard_tab(self):
        """Build the analytics dashboard."""
        summary = self.analytics_service.get_summary(self.store)
        recent = self.analytics_service.get_recent_transactions(self.store)

        with ui.column().classes('w-full grow p-4 gap-6'):
            with ui.row().classes('w-full items-center justify-between'):
                with ui.column().classes('gap-0'):
                    ui.label('Dashboard').classes('text-2xl font-bold')
                    ui.label("Welcome back! Here's your financial overview.").classes('text-slate-400')
                ui.button('Add Transaction', on_click=self._open_add_dialog, icon='add')

            if self.session_gate.transactions_loading:
                ui.spinner(size='lg')
                return

            # Stats Cards
            with ui.row().classes('w-full gap-4'):
                self._stat_card('Total Income', format_money(summary.total_income), 'green-400')
                self._stat_card('Total Expenses', format_money(summary.total_expenses), 'red-400')
                self._stat_card(
                    'Balance',
                    format_balance(summary.balance),
                    'sky-400' if summary.balance >= 0 else 'red-500',
                )
                self._stat_card('Goals Progress', f'{summary.goals_progress}%', 'purple-400')

            # Charts and recent activity
            with ui.row().classes('w-full gap-4'):
                with ui.card().classes('grow p-4 bg-slate-800 border-slate-700'):
                    ui.label('Expenses by Category').classes('text-lg font-bold mb-4')
                    if summary.expenses_by_category:
                        ui.plotly(self._expense_figure(summary.expenses_by_category)).classes('w-full h-80')
                    else:
                        ui.label('No expenses recorded this month.').classes('text-slate-400 py-8')

                with ui.card().classes('grow p-4 bg-slate-800 border-slate-700'):
                    ui.label('Recent Transactions').classes('text-lg font-bold mb-4')
                    if not recent:
                        ui.label(empty_list_message(0)).classes('text-slate-400 py-8')
                    for txn in recent:
                        self._transaction_row(txn, short_date(txn.date))

    def _stat_card(self, title: str, value: str, color: str):
        with ui.card().classes('grow p-6 bg-slate-800 border border-slate-700 items-center justify-center'):
            ui.label(title).classes('text-slate-400 uppercase text-xs tracking-wider')
            ui.label(value).classes(f'text-3xl font-bold text-{color}')

    def _expense_figure(self, expenses_by_category: dict[str, float]) -> go.Figure:
        cats = list(expenses_by_category.keys())
        vals = list(expenses_by_category.values())
        colors = category_colors(cats)

        fig = go.Figure(data=[go.Pie(
            labels=cats,
            values=vals,
            hole=.4,
            marker=dict(colors=[colors[c] for c in cats]),
            sort=False,
        )])
        fig.update_layout(
            margin=dict(t=0, b=0, l=0, r=0),
            paper_bgcolor='rgba(0,0,0,0)',
            plot_bgcolor='rgba(0,0,0,0)',
            font=dict(color='#f8fafc'),
            showlegend=True
        )
        return fig

    def _build_transactions_tab(self):
        """Build the filters and the transaction list."""
        with ui.column().classes('w-full grow p-4 gap-4'):
            with ui.row().classes('w-full items-center justify-between'):
                with ui.column().classes('gap-0'):
                    ui.label('Transactions').classes('text-2xl font-bold')
                    ui.label('Manage and track all your financial transactions.').classes('text-slate-400')
                ui.button('Add Transaction', on_click=self._open_add_dialog, icon='add')

            with ui.card().classes('w-full p-4 bg-slate-800 border-slate-700'):
                with ui.row().classes('w-full gap-4'):
                    ui.input(
                        'Search transactions...',
                        value=self.criteria.search,
                        on_change=lambda e: self._set_criteria(search=e.value or ''),
                    ).props('clearable').classes('grow')
                    ui.select(
                        {ALL: 'All Types', 'income': 'Income', 'expense': 'Expense'},
                        value=self.criteria.type,
                        label='Type',
                        on_change=lambda e: self._set_criteria(type=e.value),
                    ).classes('w-48')
                    options = {ALL: 'All Categories'}
                    options.update({c: c for c in category_options(self.store)})
                    if self.criteria.category not in options:
                        self.criteria = replace(self.criteria, category=ALL)
                    ui.select(
                        options,
                        value=self.criteria.category,
                        label='Category',
                        on_change=lambda e: self._set_criteria(category=e.value),
                    ).classes('w-48')

            self.transaction_list()

    @ui.refreshable
    def transaction_list(self):
        """Render the filtered, date-ordered transaction list."""
        rows = filter_transactions(self.store, self.criteria)
        with ui.card().classes('w-full p-4 bg-slate-800 border-slate-700'):
            ui.label(f'All Transactions ({len(rows)})').classes('text-lg font-bold mb-2')
            if not rows:
                ui.label(empty_list_message(len(self.store))).classes('text-slate-400 py-8 text-center w-full')
            for txn in rows:
                self._transaction_row(txn, long_date(txn.date), deletable=True)

    def _transaction_row(self, txn: Transaction, date_label: str, deletable: bool = False):
        with ui.row().classes('w-full items-center justify-between p-3 border border-slate-700 rounded-lg'):
            with ui.column().classes('gap-1 grow'):
                with ui.row().classes('items-center gap-2'):
                    ui.badge(txn.type, color='green' if txn.is_income else 'red')
                    ui.label(txn.category).classes('font-medium')
                if txn.description:
                    ui.label(txn.description).classes('text-sm text-slate-400')
                ui.label(date_label).classes('text-xs text-slate-400')
            ui.label(format_signed_amount(txn)).classes(
                f"text-lg font-semibold {'text-green-400' if txn.is_income else 'text-red-400'}"
            )
            if deletable:
                ui.button(icon='delete', color='red', on_click=lambda t=txn: self._confirm_delete(t)).props('flat')

    def _build_placeholder(self, name: str, icon: str, blurb: str):
        with ui.column().classes('w-full items-center py-12 gap-4'):
            ui.icon(icon, size='xl').classes('text-sky-400')
            ui.label(name).classes('text-2xl font-bold')
            ui.label(blurb).classes('text-slate-400 text-center max-w-md')
            ui.label('Coming soon!').classes('text-sm text-slate-400')

    # Logic Methods
    def _set_criteria(self, **changes):
        self.criteria = replace(self.criteria, **changes)
        self.transaction_list.refresh()

    def _open_add_dialog(self):
        """Open the add-transaction dialog."""
        with ui.dialog() as dialog, ui.card().classes('w-96'):
            ui.label('Add Transaction').classes('text-xl font-bold mb-4')
            txn_type = ui.select(
                {t.value: t.value.capitalize() for t in TransactionType},
                label='Type',
                value=TransactionType.EXPENSE.value,
            ).classes('w-full')
            amount = ui.number('Amount', min=0, format='%.2f').classes('w-full')
            category = ui.input(
                'Category', autocomplete=category_options(self.store)
            ).classes('w-full')
            description = ui.input('Description').classes('w-full')
            date = ui.input('Date', value=datetime.now().strftime('%Y-%m-%d')).props('type=date').classes('w-full')

            with ui.row().classes('w-full justify-end mt-4'):
                ui.button('Cancel', on_click=dialog.close).props('flat')
                ui.button('Save', on_click=lambda: self._save_new(
                    dialog, txn_type.value, amount.value, category.value, description.value, date.value
                ))
        dialog.open()

    async def _save_new(self, dialog, txn_type, amount, category, description, date):
        try:
            data = TransactionCreate(
                type=txn_type,
                amount=amount,
                category=(category or '').strip(),
                description=description or None,
                date=datetime.strptime(date, '%Y-%m-%d'),
            )
        except (ValidationError, ValueError, TypeError) as ex:
            ui.notify(f'Invalid transaction: {ex}', type='negative')
            return

        dialog.close()
        _, notice = await self.transaction_service.add_transaction(data, self.session_gate.user.id)
        self._notify(notice)
        self.refresh_all()

    def _confirm_delete(self, txn: Transaction):
        with ui.dialog() as dialog, ui.card():
            ui.label(f'Delete the {txn.category} transaction of {format_money(txn.amount)}?').classes('text-lg')
            with ui.row().classes('w-full justify-end'):
                ui.button('Cancel', on_click=dialog.close).props('flat')
                ui.button('Delete', color='red', on_click=lambda: self._perform_delete(dialog, txn.id))
        dialog.open()

    async def _perform_delete(self, dialog, transaction_id: str):
        dialog.close()
        notice = await self.transaction_service.delete_transaction(transaction_id)
        self._notify(notice)
        self.refresh_all()

    def _notify(self, notice):
        ui.notify(
            f'{notice.title}: {notice.message}',
            type='info' if notice.local_only else 'positive',
        )

    def refresh_all(self):
        """Refresh all data views."""
        self.content.refresh()
