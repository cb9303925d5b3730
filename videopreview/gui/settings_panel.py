"""Side panel: video information, selected frame and option editors."""

from __future__ import annotations

import logging
from typing import Callable, Optional, assert_never

from PySide6.QtCore import QSize, Qt, Signal
from PySide6.QtGui import QAction, QGuiApplication
from PySide6.QtWidgets import (
    QCheckBox,
    QComboBox,
    QFormLayout,
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QMenu,
    QSlider,
    QSpinBox,
    QVBoxLayout,
    QWidget,
)

from ..core.options import (
    Auto,
    Boolean,
    Decimal,
    DecimalOrAuto,
    EnumeratedString,
    OptionDescriptor,
    Percentage,
    PositiveInteger,
    PositiveIntegerOrAuto,
    PositiveIntegerOrString,
    RECOGNISED_OPTIONS,
    format_value,
)
from ..core.preferences import Preferences
from ..core.session import PreviewSession
from ..utils.validators import Rejected, ValidationOutcome

logger = logging.getLogger(__name__)

SPIN_MAX = 1_000_000
SLIDER_STEPS = 100


class OptionLabel(QLabel):
    """Option name with a context menu for copying its id, value or config string."""

    def __init__(self, descriptor: OptionDescriptor, session: PreviewSession, parent: Optional[QWidget] = None):
        super().__init__(descriptor.label, parent)
        self.descriptor = descriptor
        self.session = session
        self.setToolTip(descriptor.description)
        self.setContextMenuPolicy(Qt.CustomContextMenu)
        self.customContextMenuRequested.connect(self._show_menu)

    def _show_menu(self, pos) -> None:  # pragma: no cover - UI callback
        option_id = self.descriptor.id
        value = self.session.options.get_value(option_id)
        menu = QMenu(self)
        for title, text in (
            ("Copy id", option_id),
            ("Copy value", format_value(value) if value is not None else ""),
            ("Copy configuration string", self.session.options.to_config_string(option_id)),
        ):
            action = QAction(title, menu)
            action.triggered.connect(lambda _=False, t=text: QGuiApplication.clipboard().setText(t))
            menu.addAction(action)
        menu.exec(self.mapToGlobal(pos))


class OptionEditor(QWidget):
    """Base editor; subclasses build widgets and reload them in :meth:`refresh`."""

    changed = Signal()

    def __init__(self, descriptor: OptionDescriptor, session: PreviewSession, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self.descriptor = descriptor
        self.session = session
        self._updating = False
        self.row = QHBoxLayout(self)
        self.row.setContentsMargins(0, 0, 0, 0)

    @property
    def value(self):
        return self.session.options.get_value(self.descriptor.id)

    def refresh(self) -> None:
        self._updating = True
        try:
            self._load()
        finally:
            self._updating = False

    def _load(self) -> None:
        raise NotImplementedError

    def _submit(self, action: Callable[[], ValidationOutcome]) -> None:
        if self._updating:
            return
        outcome = action()
        if isinstance(outcome, Rejected):
            logger.info("Edit to %s not applied: %s", self.descriptor.id, outcome.reason)
        # Show whatever is stored now, whether the edit was clamped, rejected or accepted.
        self.refresh()
        self.changed.emit()

    def _set(self, raw: object) -> None:
        self._submit(lambda: self.session.set_value(self.descriptor.id, raw))

    def _set_auto(self, enabled: bool) -> None:
        self._submit(lambda: self.session.set_automatic(self.descriptor.id, enabled))


class BooleanEditor(OptionEditor):
    def __init__(self, descriptor, session, parent=None):
        super().__init__(descriptor, session, parent)
        self.check = QCheckBox(self)
        self.row.addWidget(self.check)
        self.row.addStretch(1)
        self.check.toggled.connect(self._set)

    def _load(self) -> None:
        self.check.setChecked(bool(self.value))


class IntegerEditor(OptionEditor):
    """Spin box for the integer kinds; the option store clamps out-of-range entries."""

    def __init__(self, descriptor, session, parent=None, maximum: int = SPIN_MAX, with_auto: bool = False):
        super().__init__(descriptor, session, parent)
        self.spin = QSpinBox(self)
        self.spin.setRange(-SPIN_MAX, maximum)
        self.auto_check: Optional[QCheckBox] = None
        if with_auto:
            self.auto_check = QCheckBox("Automatic", self)
            self.row.addWidget(self.auto_check)
            self.auto_check.toggled.connect(self._set_auto)
        self.row.addWidget(self.spin, 1)
        self.spin.editingFinished.connect(lambda: self._set(self.spin.value()))

    def _load(self) -> None:
        value = self.value
        is_auto = isinstance(value, Auto)
        if self.auto_check is not None:
            self.auto_check.setChecked(is_auto)
            self.spin.setVisible(not is_auto)
        if isinstance(value, int) and not isinstance(value, bool):
            self.spin.setValue(value)
        elif is_auto:
            remembered = self.session.options.remembered_value(self.descriptor.id)
            if isinstance(remembered, int):
                self.spin.setValue(remembered)


class IntegerOrStringEditor(OptionEditor):
    def __init__(self, descriptor, session, parent=None):
        super().__init__(descriptor, session, parent)
        self.spin = QSpinBox(self)
        self.spin.setRange(-SPIN_MAX, SPIN_MAX)
        self.combo = QComboBox(self)
        self.combo.addItem("")
        self.combo.addItems(list(descriptor.kind.choices))
        self.row.addWidget(self.spin, 1)
        self.row.addWidget(self.combo, 1)
        self.spin.editingFinished.connect(lambda: self._set(self.spin.value()))
        self.combo.textActivated.connect(lambda text: self._set(text) if text else None)

    def _load(self) -> None:
        value = self.value
        if isinstance(value, str):
            self.combo.setCurrentText(value)
        elif isinstance(value, int):
            self.combo.setCurrentIndex(0)
            self.spin.setValue(value)


class DecimalEditor(OptionEditor):
    def __init__(self, descriptor, session, parent=None, with_auto: bool = False):
        super().__init__(descriptor, session, parent)
        self.slider = QSlider(Qt.Horizontal, self)
        self.slider.setRange(0, SLIDER_STEPS)
        self.auto_check: Optional[QCheckBox] = None
        if with_auto:
            self.auto_check = QCheckBox("Automatic", self)
            self.row.addWidget(self.auto_check)
            self.auto_check.toggled.connect(self._set_auto)
        self.row.addWidget(self.slider, 1)
        self.slider.sliderReleased.connect(lambda: self._set(self.slider.value() / SLIDER_STEPS))

    def _load(self) -> None:
        value = self.value
        is_auto = isinstance(value, Auto)
        if self.auto_check is not None:
            self.auto_check.setChecked(is_auto)
            self.slider.setEnabled(not is_auto)
        if is_auto:
            value = self.session.options.remembered_value(self.descriptor.id)
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            self.slider.setValue(round(float(value) * SLIDER_STEPS))


class ChoiceEditor(OptionEditor):
    def __init__(self, descriptor, session, parent=None):
        super().__init__(descriptor, session, parent)
        self.combo = QComboBox(self)
        self.combo.addItems(list(descriptor.kind.choices))
        self.row.addWidget(self.combo, 1)
        self.combo.textActivated.connect(self._set)

    def _load(self) -> None:
        self.combo.setCurrentText(str(self.value))


def make_option_editor(descriptor: OptionDescriptor, session: PreviewSession, parent=None) -> OptionEditor:
    """Pick the editor for an option from its kind."""

    kind = descriptor.kind
    match kind:
        case Boolean():
            return BooleanEditor(descriptor, session, parent)
        case PositiveInteger():
            return IntegerEditor(descriptor, session, parent)
        case PositiveIntegerOrAuto():
            return IntegerEditor(descriptor, session, parent, with_auto=True)
        case PositiveIntegerOrString():
            return IntegerOrStringEditor(descriptor, session, parent)
        case Percentage():
            return IntegerEditor(descriptor, session, parent, maximum=1000)
        case Decimal():
            return DecimalEditor(descriptor, session, parent)
        case DecimalOrAuto():
            return DecimalEditor(descriptor, session, parent, with_auto=True)
        case EnumeratedString():
            return ChoiceEditor(descriptor, session, parent)
        case _:
            assert_never(kind)


class SidePanel(QWidget):
    """Video information, selected frame details and the option editors."""

    changed = Signal()

    def __init__(self, session: PreviewSession, preferences: Preferences, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.session = session
        self.preferences = preferences
        self.video_box = QGroupBox("Video Information", self)
        self.video_form = QFormLayout(self.video_box)
        self.frame_box = QGroupBox("Frame Information", self)
        self.frame_form = QFormLayout(self.frame_box)
        self.config_box = QGroupBox("Configuration", self)
        self.config_form = QFormLayout(self.config_box)
        self.editors: list[OptionEditor] = []

        for descriptor in RECOGNISED_OPTIONS.values():
            editor = make_option_editor(descriptor, session, self)
            editor.changed.connect(self.changed.emit)
            self.config_form.addRow(OptionLabel(descriptor, session, self), editor)
            self.editors.append(editor)

        layout = QVBoxLayout(self)
        layout.addWidget(self.video_box)
        layout.addWidget(self.frame_box)
        layout.addWidget(self.config_box)
        layout.addStretch(1)
        self.refresh()

    def refresh(self) -> None:
        self._fill_video_info()
        self._fill_frame_info()
        for editor in self.editors:
            editor.refresh()
        self.video_box.setVisible(self.preferences.side_panel_video)
        self.frame_box.setVisible(self.preferences.side_panel_frame)
        self.config_box.setVisible(self.preferences.side_panel_config)
        self.config_box.setEnabled(self.session.options.has_subject)

    def _fill_video_info(self) -> None:
        _clear_form(self.video_form)
        source = self.session.source
        if source is None:
            self.video_form.addRow(QLabel("No video loaded", self))
            return
        visible = {
            "Path": self.preferences.video_info_path,
            "Encoding": self.preferences.video_info_encoding,
            "Frame rate": self.preferences.video_info_framerate,
            "Length": self.preferences.video_info_length,
            "Frames": self.preferences.video_info_frames,
            "Dimensions": self.preferences.video_info_dimensions,
        }
        for label, value in source.describe().items():
            if visible.get(label, True):
                field = QLineEdit(value, self)
                field.setReadOnly(True)
                self.video_form.addRow(label, field)

    def _fill_frame_info(self) -> None:
        _clear_form(self.frame_form)
        frame = self.session.selected_frame
        if frame is None:
            self.frame_form.addRow(QLabel("No frame selected", self))
            return
        if self.preferences.frame_info_timestamp:
            self.frame_form.addRow("Time stamp", QLabel(frame.timestamp_string, self))
        if self.preferences.frame_info_number:
            self.frame_form.addRow("Frame number", QLabel(str(frame.frame_number), self))

    def sizeHint(self) -> QSize:  # pragma: no cover - Qt paints this
        return QSize(300, 600)


def _clear_form(form: QFormLayout) -> None:
    while form.rowCount():
        form.removeRow(0)
