from InquirerPy import inquirer
from rich.markup import escape

from launcher import console, load_config, save_config, list_folders


def set_remark(config, name, remark):
    remark = remark.strip()
    if remark:
        config.remarks[name] = remark
    else:
        config.remarks.pop(name, None)


def pin_folder(config, name):
    if name not in config.pinned:
        config.pinned.append(name)


def main():
    try:
        config = load_config()
        folders = list_folders(config.project_dir, config.pinned)
    except (OSError, ValueError) as e:
        console.print(f"[red]Could not read project folders:[/red] {escape(str(e))}")
        return
    if not folders:
        console.print("[red]No folders found in the project directory.[/red]")
        return

    # Ask user which folder to annotate
    name = inquirer.fuzzy(
        message="Select a folder:",
        choices=folders
    ).execute()
    remark = inquirer.text(
        message="Enter a remark (empty to clear):",
        default=config.remarks.get(name, "")
    ).execute()
    set_remark(config, name, remark)

    # Optionally pin it
    if name not in config.pinned:
        pin = inquirer.confirm(message="Pin this folder to the top?", default=False).execute()
        if pin:
            pin_folder(config, name)

    save_config(config)
    console.print(f"[green]✅ Folder '{escape(name)}' updated successfully![/green]")


if __name__ == "__main__":
    main()
