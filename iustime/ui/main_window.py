# Rev 0.2.0
# iustime main window: navigation list + keyed workspace
# Header: active line | line switch (admin) | global-view line picker (admin) | user | logout

from __future__ import annotations

from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QHBoxLayout, QPushButton, QLabel, QListWidget,
    QListWidgetItem, QComboBox, QDockWidget, QSplitter, QDialog
)

from iustime.app_context import AppContext
from iustime.models.types import GLOBAL_VIEWS, VIEW_LABELS, ViewState
from iustime.services.auth_service import Session
from iustime.services.references import line_name
from iustime.ui.dashboard_view import DashboardView
from iustime.ui.diagnostics_panel import DiagnosticsPanel
from iustime.ui.dialogs.line_selector_dialog import LineSelectorDialog
from iustime.ui.monthly_review_view import MonthlyReviewView
from iustime.ui.panels.timeline_panel import TimelinePanel
from iustime.ui.projects_view import ProjectsView
from iustime.ui.risks_view import RisksView
from iustime.ui.tasks_view import TasksView
from iustime.ui.user_management_view import UserManagementView
from iustime.ui.window_mode import apply_window_settings, window_settings
from iustime.ui.workspace import WorkspaceStack
from iustime.utils.config import save_settings
from iustime.utils.logging_setup import get_logger
from iustime.viewmodels.dashboard_viewmodel import DashboardViewModel
from iustime.viewmodels.lines_viewmodel import LinesViewModel
from iustime.viewmodels.projects_viewmodel import ProjectsViewModel
from iustime.viewmodels.review_viewmodel import MonthlyReviewViewModel
from iustime.viewmodels.risks_viewmodel import RisksViewModel
from iustime.viewmodels.tasks_viewmodel import TasksViewModel
from iustime.viewmodels.timeline_viewmodel import TimelineViewModel
from iustime.viewmodels.users_viewmodel import UsersViewModel


class MainWindow(QMainWindow):
    logoutRequested = Signal()

    def __init__(self, *, ctx: AppContext, session: Session, parent=None):
        super().__init__(parent)
        self._log = get_logger("MainWindow")
        self._ctx = ctx
        self._session = session
        store = ctx.store

        self.setWindowTitle("IUSTIME - Gestión de proyectos")

        # ---- view models ----
        self._lines_vm = LinesViewModel(store)
        self._scoped = {
            ViewState.DASHBOARD: DashboardViewModel(store),
            ViewState.PROJECTS: ProjectsViewModel(store),
            ViewState.TASKS: TasksViewModel(store),
            ViewState.TIMELINE: TimelineViewModel(store),
            ViewState.RISKS: RisksViewModel(store),
            ViewState.MONTHLY_REVIEW: MonthlyReviewViewModel(store, ctx.reviewer),
            ViewState.GLOBAL_DASHBOARD: DashboardViewModel(store),
            ViewState.GLOBAL_REVIEW: MonthlyReviewViewModel(store, ctx.reviewer),
        }
        self._users_vm = UsersViewModel(store)

        # ---- workspace ----
        self._workspace = WorkspaceStack(self)
        vm = self._scoped
        self._workspace.add_panel(ViewState.DASHBOARD.value, DashboardView(vm[ViewState.DASHBOARD]))
        self._workspace.add_panel(ViewState.PROJECTS.value, ProjectsView(vm[ViewState.PROJECTS]))
        self._workspace.add_panel(ViewState.TASKS.value, TasksView(vm[ViewState.TASKS]))
        self._workspace.add_panel(ViewState.TIMELINE.value, TimelinePanel(vm[ViewState.TIMELINE]))
        self._workspace.add_panel(ViewState.RISKS.value, RisksView(vm[ViewState.RISKS]))
        self._workspace.add_panel(ViewState.MONTHLY_REVIEW.value, MonthlyReviewView(vm[ViewState.MONTHLY_REVIEW]))
        self._workspace.add_panel(ViewState.GLOBAL_DASHBOARD.value, DashboardView(vm[ViewState.GLOBAL_DASHBOARD]))
        self._workspace.add_panel(ViewState.GLOBAL_REVIEW.value, MonthlyReviewView(vm[ViewState.GLOBAL_REVIEW]))
        self._workspace.add_panel(ViewState.CONFIGURATION.value, UserManagementView(self._users_vm))

        # ---- navigation ----
        self._nav = QListWidget()
        self._nav.setFixedWidth(200)
        for view in session.allowed_views():
            item = QListWidgetItem(VIEW_LABELS[view])
            item.setData(Qt.UserRole, view.value)
            self._nav.addItem(item)
        self._nav.currentItemChanged.connect(self._on_nav_changed)

        # ---- header ----
        self._lbl_line = QLabel("")
        self._lbl_line.setStyleSheet("font-weight: 600; font-size: 14px;")
        self._btn_switch = QPushButton("Cambiar línea")
        self._btn_switch.clicked.connect(self._on_switch_line)
        self._btn_switch.setVisible(session.user.is_admin)
        self._cmb_global_line = QComboBox()
        self._cmb_global_line.currentIndexChanged.connect(self._on_global_line_changed)
        self._lbl_global = QLabel("Línea:")
        btn_logout = QPushButton("Cerrar sesión")
        btn_logout.clicked.connect(self._on_logout)

        header = QHBoxLayout()
        header.addWidget(self._lbl_line)
        header.addWidget(self._btn_switch)
        header.addWidget(self._lbl_global)
        header.addWidget(self._cmb_global_line)
        header.addStretch(1)
        header.addWidget(QLabel(f"{session.user.name} ({session.user.role})"))
        header.addWidget(btn_logout)

        body = QSplitter(Qt.Horizontal)
        body.addWidget(self._nav)
        body.addWidget(self._workspace)
        body.setStretchFactor(1, 1)

        central = QWidget(self)
        v = QVBoxLayout(central)
        v.addLayout(header)
        v.addWidget(body, 1)
        self.setCentralWidget(central)

        # ---- diagnostics dock ----
        dock = QDockWidget("Diagnóstico", self)
        dock.setObjectName("DiagnosticsDock")
        dock.setAllowedAreas(Qt.BottomDockWidgetArea | Qt.TopDockWidgetArea)
        dock.setWidget(DiagnosticsPanel(self))
        self.addDockWidget(Qt.BottomDockWidgetArea, dock)
        dock.setVisible(bool(ctx.settings["ui"].get("diagnostics_dock_visible")))
        self._dock = dock
        self.menuBar().addMenu("Ver").addAction(dock.toggleViewAction())

        self._select_nav(self._session.current_view)

    # -------------------- public --------------------

    def show_restored(self) -> None:
        apply_window_settings(self, self._ctx.settings["main_window"])
        if self._session.needs_line_selection:
            self._on_switch_line()

    # -------------------- navigation --------------------

    def _select_nav(self, view: ViewState) -> None:
        for i in range(self._nav.count()):
            if self._nav.item(i).data(Qt.UserRole) == view.value:
                self._nav.setCurrentRow(i)
                return

    def _on_nav_changed(self, current: QListWidgetItem, _previous) -> None:
        if current is None:
            return
        view = ViewState(current.data(Qt.UserRole))
        if not self._session.change_view(view):
            return
        if self._session.needs_line_selection and self.isVisible():
            self._on_switch_line()
            return
        self._show_current()

    def _show_current(self) -> None:
        view = self._session.current_view
        line_id = self._session.active_line_id
        vm = self._scoped.get(view)
        if vm is not None:
            vm.set_line(line_id)
        self._refresh_header()
        self._workspace.show_panel(view.value)
        self._log.debug("Showing %s for line %s", view.value, line_id)

    def _refresh_header(self) -> None:
        lines = self._ctx.store.lines.list()
        is_global = self._session.is_global_view
        picker = self._session.user.is_admin and self._session.current_view in GLOBAL_VIEWS - {ViewState.CONFIGURATION}
        self._lbl_global.setVisible(picker)
        self._cmb_global_line.setVisible(picker)
        if picker:
            self._cmb_global_line.blockSignals(True)
            self._cmb_global_line.clear()
            for line in lines:
                self._cmb_global_line.addItem(line.name, line.id)
            ix = self._cmb_global_line.findData(self._session.admin_view_line_id)
            self._cmb_global_line.setCurrentIndex(ix if ix >= 0 else 0)
            self._session.admin_view_line_id = self._cmb_global_line.currentData()
            self._cmb_global_line.blockSignals(False)
        if is_global:
            self._lbl_line.setText("Vista global")
        else:
            self._lbl_line.setText(line_name(self._session.selected_line_id, lines))

    # -------------------- line handling --------------------

    def _on_switch_line(self) -> None:
        dlg = LineSelectorDialog(self._lines_vm, parent=self)
        if dlg.exec() == QDialog.Accepted and dlg.selected_line_id():
            self._session.select_line(dlg.selected_line_id())
            self._log.info("Line selected: %s", self._session.selected_line_id)
        elif self._session.selected_line_id is None:
            # no line to work in: fall back to the global dashboard
            self._session.change_view(ViewState.GLOBAL_DASHBOARD)
        self._select_nav(self._session.current_view)
        self._show_current()

    def _on_global_line_changed(self, _ix: int) -> None:
        self._session.admin_view_line_id = self._cmb_global_line.currentData()
        self._show_current()

    # -------------------- lifecycle --------------------

    def _on_logout(self) -> None:
        self._log.info("User %s logged out", self._session.user.email)
        self.logoutRequested.emit()
        self.close()

    def closeEvent(self, ev):
        settings = self._ctx.settings
        settings["main_window"] = window_settings(self)
        settings["ui"]["diagnostics_dock_visible"] = self._dock.isVisible()
        try:
            save_settings(settings)
        except OSError as e:
            self._log.warning("Could not save settings: %s", e)
        super().closeEvent(ev)
