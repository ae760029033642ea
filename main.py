# Main.py
""""" Entry point for the Complex Calculator.

   Responsibilities:
   - Detect run mode (script vs PyInstaller.exe)
   - Verify required files exist in development mode
   - Load configuration and start the Qt GUI

   Pass '--console' to use the text runner instead of the GUI.
"""""
import sys
from pathlib import Path
from ComplexCalc import config_manager as config_manager


# Resolve project root depending on run mode (Script or .exe)

if getattr(sys, 'frozen', False):
    PROJECT_ROOT = Path(sys._MEIPASS)
else:
    PROJECT_ROOT = Path(__file__).resolve().parent


REQUIRED_MODULES = [
    "UI.py",
    "Cas.py",
    "MathEngine.py",
    "Tokenizer.py",
    "ScientificEngine.py",
    "ComplexNumber.py",
    "config_manager.py",
    "error.py",
]


def check_files_exist():

    """
      Fail fast in development if required files are missing / moved / renamed.
      In production (.exe) the files are embedded by the bundler, so this check is skipped.
    """

    modules_dir = PROJECT_ROOT / "ComplexCalc"

    required = [modules_dir / name for name in REQUIRED_MODULES]
    required.append(PROJECT_ROOT / "config.json")
    required.append(PROJECT_ROOT / "ui_strings.json")

    missing_files = [file_path.name for file_path in required if not file_path.exists()]

    if missing_files:
        print("Error: The following files are missing or in the wrong location:")
        for file_name in missing_files:
            print(f"- {file_name}")
        sys.exit(1)


def main(argv=None):

    """
    Load configuration and start the GUI (or the console runner).
    """

    if argv is None:
        argv = sys.argv[1:]

    all_settings = config_manager.load_setting_value("all")
    if all_settings["debug"] == True:
        print("Config loaded:", all_settings)

    if "--console" in argv:
        from ComplexCalc import Cas as Cas
        Cas.test_main()
        return

    # The UI owns the event loop
    from ComplexCalc import UI as UI
    UI.main()


if __name__ == "__main__":
    is_running_as_exe = getattr(sys, 'frozen', False)

    if not is_running_as_exe:
        print("Developer Mode: Checking file paths...")
        check_files_exist()
    else:
        print("Production mode (.exe) is starting...")
    main()
