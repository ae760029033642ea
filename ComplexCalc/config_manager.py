# config_manager.py
import json
from pathlib import Path

config_json = Path(__file__).resolve().parent.parent / "config.json"
ui_strings = Path(__file__).resolve().parent.parent / "ui_strings.json"


# Used whenever config.json is missing a key (or the file itself)
DEFAULT_SETTINGS = {
    "decimal_places": 10,
    "darkmode": False,
    "shift_to_copy": True,
    "keep_scope": True,
    "debug": False,
    "max_depth": 120
}



def load_setting_value(key_value):
    try:
        with open(config_json, 'r', encoding= 'utf-8') as f:
            settings_dict = json.load(f)

    except (FileNotFoundError, json.JSONDecodeError):
        settings_dict = {}


    if key_value == "all":
        merged = dict(DEFAULT_SETTINGS)
        merged.update(settings_dict)
        return merged

    else:
        return settings_dict.get(key_value, DEFAULT_SETTINGS.get(key_value, 0))


def load_setting_description(key_value):
    try:
        with open(ui_strings, 'r', encoding= 'utf-8') as f:
            settings_dict = json.load(f)

    except (FileNotFoundError, json.JSONDecodeError):
        return {}


    if key_value == "all":
        return settings_dict

    else:
        return settings_dict.get(key_value, 0)




def save_setting(settings_dict):
    try:
        with open (config_json, 'w', encoding= 'utf-8') as f:
            json.dump(settings_dict, f, indent=4)
            return settings_dict

    except (FileNotFoundError, PermissionError, TypeError):
        return{}





if __name__ == "__main__":
    print(load_setting_value("all"))
    print(load_setting_value("decimal_places"))
    print(load_setting_description("all"))
