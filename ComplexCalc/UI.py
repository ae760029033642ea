# UI.py
""""PySide6 user interface for the Complex Calculator.

Structure
---------
- Calculator UI: main window with input line, result display, scope view and button grid
- Settings UI: modal dialog for user preferences

Responsibilities (Calculator)
-----------------------------
- Build window, display, layout and buttons
- Dispatch expression/equation to Cas.calculate in a worker thread
- Render results and show MathErrors as dialogs
- Keep solved variables in a scope, so a system can be solved one equation at a time
- Clipboard integration (copy result, Shift + button pastes)


Responsibilities (Settings)
---------------------------

- Load Current Settings and Settings Descriptions via Config_Manager
- Validate user input (e.g. minimum decimal places)
- Save and apply theme changes immediately


Threading Note
--------------
Evaluation is executed off the UI thread in Worker(QObject), so the UI can still handle events like resizing.
Results (or errors) are emitted via a Qt signal and handled back in the UI.
"""""

from PySide6 import QtWidgets
from PySide6.QtCore import Qt, QObject, Signal
import sys
import threading
from pynput.keyboard import Controller
import pyperclip
from . import error as E  # Imports error.py as a module
from . import config_manager as config_manager  # Imports config_manager.py as a module
from . import Cas as Cas  # Imports Cas.py as a module
from . import MathEngine as MathEngine


# Smallest accepted value per integer setting
MINIMUM_VALUES = {
    "decimal_places": 2,
    "max_depth": 10,
}


def is_shift_pressed():
    """""

    Small and simple check, whether shift is pressed or not.
    Used for the "shift to copy" setting.

    """""

    keyboard_controller = Controller()
    return keyboard_controller.shift_pressed


def format_scope(scope):
    """Render the scope as 'x = 3   y = 2, -2' for the scope label."""
    decimal_places = config_manager.load_setting_value("decimal_places")
    parts = []
    for name in sorted(scope):
        text, _ = MathEngine.cleanup(scope[name], decimal_places)
        parts.append(f"{name} = {text}")
    return "   ".join(parts)


class Worker(QObject):
    """""

    This Class always runs in a seperate thread, responsible for transmitting the problem to Cas.calculate
    and emits a Signal when the calculations are done / failed back to the Calculator UI for processing.
    It works on its own copy of the scope; the UI decides whether to keep it.

    """""

    job_finished = Signal(object, str, int, dict)

    def __init__(self, problem, scope):
        super().__init__()
        self.data = problem
        self.scope = dict(scope)

    def run_Calc(self):

        try:
            # --- 1. Start Calculation ---
            result, mode = Cas.calculate(self.data, self.scope)

            # --- 2. Send Success Signal ---
            self.job_finished.emit(result, self.data, mode, self.scope)

        except E.MathError as e:
            # --- 3. Send Math Error Signal ---
            self.job_finished.emit(e, self.data, 0, self.scope)

        except Exception as e:
            # --- 4. Send Critical Error Signal ---
            critical_error = E.MathError(
                message=f"Unexpected crash: {e}",
                code="9999",
                equation=self.data
            )
            self.job_finished.emit(critical_error, self.data, 0, self.scope)


class SettingsDialog(QtWidgets.QDialog):
    """""

    Settings window: one checkbox per boolean setting, one input field per integer setting.
    Saves through config_manager when OK is pressed, ignores the changes on Cancel.

    """""

    settings_saved = Signal()

    def __init__(self, parent=None):
        super().__init__(parent)
        self.widgets = {}

        # --- 1. Window Setup ---
        self.setWindowTitle("Calculator Settings")
        self.setMinimumSize(340, 240)

        main_layout = QtWidgets.QVBoxLayout(self)

        # --- 2. Load Settings ---
        self.setting_value_list = config_manager.load_setting_value("all")
        self.setting_description_list = config_manager.load_setting_description("all")

        # --- 3. Build Widgets ---
        for key_value, value in self.setting_value_list.items():
            description = self.setting_description_list.get(key_value, key_value)

            # --- 3a. Checkbox Builder (for Boolean settings) ---
            if isinstance(value, bool):
                checkbox = QtWidgets.QCheckBox(description)
                checkbox.setChecked(value)
                main_layout.addWidget(checkbox)
                self.widgets[key_value] = checkbox

            # --- 3b. Input Field Builder (for Integer settings) ---
            elif isinstance(value, int):
                row_h_layout = QtWidgets.QHBoxLayout()
                main_layout.addLayout(row_h_layout)
                minimum = MINIMUM_VALUES.get(key_value, 0)
                label = QtWidgets.QLabel(f"{description} (min. {minimum}):")
                input_field = QtWidgets.QLineEdit()
                input_field.setPlaceholderText(str(value))  # Show current value as placeholder

                row_h_layout.addWidget(label)
                row_h_layout.addWidget(input_field)
                row_h_layout.setStretch(1, 1)
                self.widgets[key_value] = input_field

        # --- 4. OK / Cancel Buttons ---
        button_box = QtWidgets.QDialogButtonBox(QtWidgets.QDialogButtonBox.Ok | QtWidgets.QDialogButtonBox.Cancel)
        main_layout.addWidget(button_box)
        main_layout.addStretch(1)

        button_box.accepted.connect(lambda: self.save_settings(self.setting_value_list))
        button_box.rejected.connect(self.reject)

        self.update_darkmode()

    def save_settings(self, setting_value_list):
        for key_value, widget in self.widgets.items():

            # --- 1. Checkboxes ---
            if isinstance(widget, QtWidgets.QCheckBox):
                setting_value_list[key_value] = widget.isChecked()

            # --- 2. Input Fields (like 'decimal_places') ---
            elif isinstance(widget, QtWidgets.QLineEdit):
                new_value_str = widget.text().strip()

                # If user left it blank, keep the old value
                if new_value_str == "":
                    continue

                try:
                    new_value_int = int(new_value_str)
                    minimum = MINIMUM_VALUES.get(key_value, 0)
                    if new_value_int < minimum:
                        raise ValueError(f"'{new_value_int}' is too small. Minimum is {minimum}.")
                    setting_value_list[key_value] = new_value_int

                except ValueError as e:
                    # Show an error box and STOP the save process
                    QtWidgets.QMessageBox.critical(
                        self, "Invalid Input:",
                        f"Error 4501: {E.ERROR_MESSAGES['4501']}{key_value}\n\n{e}\n\nPlease correct your input.")
                    return

        # --- 3. Write to File ---
        saved_settings = config_manager.save_setting(setting_value_list)

        if saved_settings != {}:
            self.settings_saved.emit()
            self.accept()
        else:
            QtWidgets.QMessageBox.critical(self, "Error",
                                           "Settings could not be saved (error in config_manager).")

    def update_darkmode(self):
        if self.setting_value_list["darkmode"] == True:
            self.setStyleSheet("""
                        QDialog {background-color: #121212;}
                        QLabel {color: white;}
                        QCheckBox {color: white;}
                        QLineEdit {background-color: #444444;color: white;border: 1px solid #666666;}
                        QDialogButtonBox QPushButton {background-color: #666666;color: white;}""")
        else:
            self.setStyleSheet("")


class CalculatorPrototype(QtWidgets.QWidget):

    def __init__(self):
        super().__init__()

        # --- 1. Load Settings ---
        self.setting_value_list = config_manager.load_setting_value("all")

        # --- 2. Instance State Variables ---
        self.scope = {}  # Solved variables, e.g. {"x": 3}
        self.calculator_result = ""  # Last result text (for the clipboard)
        self.thread_active = False  # Is a calculation running?
        self.button_objects = {}

        # --- 3. Window Setup ---
        self.setWindowTitle("Complex Calculator")
        self.resize(420, 600)
        self.setMinimumSize(380, 520)
        main_v_layout = QtWidgets.QVBoxLayout(self)

        expanding_policy = QtWidgets.QSizePolicy(
            QtWidgets.QSizePolicy.Policy.Expanding,
            QtWidgets.QSizePolicy.Policy.Expanding
        )

        # --- 4. Input, Result and Scope ---
        self.display = QtWidgets.QLineEdit()
        self.display.setAlignment(Qt.AlignmentFlag.AlignRight)
        self.display.setPlaceholderText("2x + 4 = 10")
        font = self.display.font()
        font.setPointSize(22)
        self.display.setFont(font)
        self.display.returnPressed.connect(self.start_calculation)
        main_v_layout.addWidget(self.display)

        self.result_label = QtWidgets.QLabel("")
        self.result_label.setAlignment(Qt.AlignmentFlag.AlignRight)
        self.result_label.setTextInteractionFlags(Qt.TextInteractionFlag.TextSelectableByMouse)
        font = self.result_label.font()
        font.setPointSize(18)
        self.result_label.setFont(font)
        main_v_layout.addWidget(self.result_label)

        self.scope_label = QtWidgets.QLabel("")
        self.scope_label.setWordWrap(True)
        main_v_layout.addWidget(self.scope_label)

        # --- 5. Button Grid Setup ---
        button_container = QtWidgets.QWidget()
        main_v_layout.addWidget(button_container, 1)
        button_grid = QtWidgets.QGridLayout(button_container)
        button_grid.setSpacing(0)
        button_grid.setContentsMargins(0, 0, 0, 0)

        # (text, row, column)
        self.buttons = [
            ('⚙️', 0, 0), ('📋', 0, 1), ('↺', 0, 2), ('<', 0, 3), ('C', 0, 4),
            ('i', 1, 0), ('e', 1, 1), ('π', 1, 2), ('^', 1, 3), ('/', 1, 4),
            ('x', 2, 0), ('7', 2, 1), ('8', 2, 2), ('9', 2, 3), ('*', 2, 4),
            ('y', 3, 0), ('4', 3, 1), ('5', 3, 2), ('6', 3, 3), ('-', 3, 4),
            ('z', 4, 0), ('1', 4, 1), ('2', 4, 2), ('3', 4, 3), ('+', 4, 4),
            ('(', 5, 0), (')', 5, 1), ('0', 5, 2), ('.', 5, 3), ('=', 5, 4),
            ('[', 6, 0), (']', 6, 1), ('{', 6, 2), ('}', 6, 3), ('⏎', 6, 4)
        ]

        for text, row, col in self.buttons:
            button = QtWidgets.QPushButton(text)
            button.setSizePolicy(expanding_policy)

            if text == '⏎':
                button.setStyleSheet("background-color: #007bff; color: white; font-weight: bold;")

            if text == '⚙️':
                button.clicked.connect(self.open_settings)
            else:
                button.clicked.connect(lambda checked=False, val=text: self.handle_button_press(val))

            button_grid.addWidget(button, row, col)
            self.button_objects[text] = button

        self.update_darkmode()

    def handle_button_press(self, value):
        if value == '⏎':
            self.start_calculation()
            return

        if value == '📋':
            self.handle_clipboard()
            return

        if value == '↺':
            # --- Forget all solved variables ---
            self.scope = {}
            self.update_scope_label()
            return

        if value == "<":
            self.display.backspace()
        elif value == "C":
            self.display.clear()
            self.result_label.setText("")
        else:
            self.display.insert(value)

        self.display.setFocus()

    def handle_clipboard(self):
        # Copy the last result; with 'shift_to_copy' enabled, Shift + button pastes instead
        if self.setting_value_list["shift_to_copy"] == True and is_shift_pressed():
            clipboard_text = pyperclip.paste()
            if clipboard_text:
                self.display.insert(clipboard_text.strip())
        elif self.calculator_result:
            pyperclip.copy(self.calculator_result)

    def start_calculation(self):
        problem = self.display.text().strip()
        if not problem:
            return

        if self.thread_active:
            self.show_error(E.MathError("A calculation is already running!", code="4002", equation=problem))
            return

        self.thread_active = True
        self.update_return_button()
        self.result_label.setText("...")  # Show "..." to indicate loading
        QtWidgets.QApplication.processEvents()

        # Without 'keep_scope' every equation starts from an empty scope
        scope = self.scope if self.setting_value_list["keep_scope"] == True else {}

        # --- Start Thread ---
        self.worker_instance = Worker(problem, scope)
        self.worker_instance.job_finished.connect(self.Calc_result)
        my_thread = threading.Thread(target=self.worker_instance.run_Calc)
        my_thread.start()

    def Calc_result(self, result, equation, mode, scope):
        # Mode:
        # 1. Variable and Rounding
        # 2. Variable and no Rounding
        # 3. No Variable but rounding
        # 4. No Variable, No rounding
        self.thread_active = False
        self.update_return_button()

        if isinstance(result, E.MathError):
            self.result_label.setText("")
            self.show_error(result)
            return

        approx_sign = "\u2248"  # "≈"
        self.calculator_result = result.strip()

        if mode in (1, 2):
            final_display_text = self.calculator_result
        elif mode == 3:
            final_display_text = f"{approx_sign} {self.calculator_result}"
        else:
            final_display_text = f"= {self.calculator_result}"

        self.result_label.setText(final_display_text)

        if self.setting_value_list["keep_scope"] == True:
            self.scope = scope
        else:
            self.scope = {}
        self.update_scope_label()

    def show_error(self, error_obj):
        error_box = QtWidgets.QMessageBox(self)
        error_code = error_obj.code
        additional_info = f"Details: {error_obj.message}\nEquation: {error_obj.equation}"

        error_box.setIcon(QtWidgets.QMessageBox.Critical)
        error_box.setWindowTitle("Calculation error")
        error_box.setText(f"Error {error_code}: {E.ERROR_MESSAGES.get(error_code, 'Unknown error')}")
        error_box.setInformativeText(additional_info)
        error_box.setStandardButtons(QtWidgets.QMessageBox.Ok)
        error_box.setStyleSheet(self.get_message_box_stylesheet())
        error_box.exec()

    def update_scope_label(self):
        self.scope_label.setText(format_scope(self.scope))

    def update_return_button(self):
        # Red "X" while busy, blue "⏎" when idle
        return_button = self.button_objects.get('⏎')
        if not return_button:
            return

        if self.thread_active == True:
            return_button.setStyleSheet("background-color: #FF0000; color: white; font-weight: bold;")
            return_button.setText("X")
        else:
            return_button.setStyleSheet("background-color: #007bff; color: white; font-weight: bold;")
            return_button.setText("⏎")
        return_button.update()

    def update_darkmode(self):
        if self.setting_value_list["darkmode"] == True:
            for text, button in self.button_objects.items():
                if text != '⏎':
                    button.setStyleSheet("background-color: #121212; color: white; font-weight: bold;")
            self.setStyleSheet("background-color: #121212;")
            self.display.setStyleSheet("background-color: #121212; color: white; font-weight: bold;")
            self.result_label.setStyleSheet("color: white; font-weight: bold;")
            self.scope_label.setStyleSheet("color: #bbbbbb;")
        else:
            for text, button in self.button_objects.items():
                if text != '⏎':
                    button.setStyleSheet("font-weight: normal;")
            self.setStyleSheet("")
            self.display.setStyleSheet("font-weight: bold;")
            self.result_label.setStyleSheet("font-weight: bold;")
            self.scope_label.setStyleSheet("color: #555555;")
        self.update_return_button()

    def open_settings(self):
        settings_dialog = SettingsDialog(self)
        settings_dialog.exec()  # "exec" makes the dialog modal (blocks main window)

        # Reload settings after dialog closes, so changes (like darkmode) are applied
        self.setting_value_list = config_manager.load_setting_value("all")
        if self.setting_value_list["keep_scope"] == False:
            self.scope = {}
            self.update_scope_label()
        self.update_darkmode()

    def get_message_box_stylesheet(self):
        if self.setting_value_list["darkmode"] == True:
            return """
                QMessageBox {
                    background-color: #121212;
                    color: white;
                }
                QLabel {
                    color: white;
                }
                QPushButton {
                    background-color: #2e2e2e;
                    color: white;
                    border: 1px solid #444444;
                    padding: 5px 15px;
                }
            """
        return ""


def main():
    app = QtWidgets.QApplication(sys.argv)
    window = CalculatorPrototype()
    window.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
