import json, os, subprocess, shutil, sys, time
from dataclasses import dataclass, field
from pathlib import Path
from InquirerPy import inquirer
from rich.console import Console
from rich.markup import escape

# ===== Global Config =====
console = Console()
CONFIG_FILE = "config.json"
PIN_MARKER = "*"
SERVER_DELAY = 5  # seconds before a dev server is started
EDITOR_CMD = ["code", "."]
WEB_SERVER_CMD = ["npm", "run", "serve"]
WEB_MANIFEST = "package.json"
WEBMAN_MARKER = "webman"
IS_WINDOWS = os.name == "nt"


@dataclass
class Config:
    project_dir: str
    pinned: list = field(default_factory=list)
    remarks: dict = field(default_factory=dict)

    def to_json(self):
        return {
            "projectDir": self.project_dir,
            "subDir": list(self.pinned),
            "remarks": [{"name": name, "remark": remark} for name, remark in self.remarks.items()],
        }

    @staticmethod
    def from_json(data):
        if not isinstance(data, dict):
            raise ValueError("config must be a JSON object")
        if not isinstance(data.get("projectDir"), str):
            raise ValueError("config is missing 'projectDir'")
        pinned = data.get("subDir")
        if pinned is None:
            pinned = []
        if not isinstance(pinned, list) or not all(isinstance(name, str) for name in pinned):
            raise ValueError("'subDir' must be a list of folder names")
        entries = data.get("remarks")
        if entries is None:
            entries = []
        if not isinstance(entries, list):
            raise ValueError("'remarks' must be a list of {name, remark} objects")
        remarks = {}
        for item in entries:
            if not isinstance(item, dict):
                raise ValueError(f"invalid remark entry: {item!r}")
            # missing or null fields read as empty strings
            name = item.get("name")
            name = "" if name is None else name
            remark = item.get("remark")
            remark = "" if remark is None else remark
            if not isinstance(name, str) or not isinstance(remark, str):
                raise ValueError(f"invalid remark entry: {item!r}")
            # the first remark for a name wins
            remarks.setdefault(name, remark)
        return Config(project_dir=data["projectDir"], pinned=list(pinned), remarks=remarks)


# ===== Config Functions =====
def executable_dir():
    return Path(sys.argv[0]).resolve().parent


def save_config(config, path=CONFIG_FILE):
    with open(path, "w", encoding="utf-8") as f:
        json.dump(config.to_json(), f, indent=2, ensure_ascii=False)
        f.write("\n")


def load_config(path=CONFIG_FILE):
    """Read the launcher config, creating a default one on first run.

    The default points ``projectDir`` at the directory holding the running
    script. A file that exists but does not parse is an error; nothing is
    rewritten in that case.
    """
    if not os.path.exists(path):
        config = Config(project_dir=str(executable_dir()))
        save_config(config, path)
        console.print(f"[yellow]Created default config at {escape(str(path))}[/yellow]")
        return config
    with open(path, "r", encoding="utf-8") as f:
        return Config.from_json(json.load(f))


# ===== Folder Listing =====
def list_folders(directory, pinned=()):
    """Return subdirectory names of ``directory``, pinned names first.

    Both groups keep the listing order (sorted by name). Plain files are
    skipped. ``OSError`` from an unreadable directory is left to the caller.
    """
    with os.scandir(directory) as it:
        names = sorted(entry.name for entry in it if entry.is_dir())
    pinned = set(pinned)
    return [n for n in names if n in pinned] + [n for n in names if n not in pinned]


# ===== Menu =====
def clear_screen():
    cmd = ["cmd", "/c", "cls"] if IS_WINDOWS else ["clear"]
    try:
        subprocess.run(cmd)
    except OSError:
        console.clear()


def format_folder_line(index, name, pinned, remarks):
    line = f"{index}. {name}"
    if name in pinned:
        line += PIN_MARKER
    remark = remarks.get(name)
    if remark is not None:
        line += f"  [{remark}]"
    return line


def print_folder_list(folders, pinned, remarks):
    console.print("[blue]Launch project:[/blue]")
    for i, name in enumerate(folders, start=1):
        console.print(escape(format_folder_line(i, name, pinned, remarks)), highlight=False)


def parse_choice(raw, count):
    try:
        choice = int(raw.strip())
    except (AttributeError, ValueError):
        return None
    if 1 <= choice <= count:
        return choice
    return None


def read_choice():
    return inquirer.text(message="Enter the number of the folder to run:").execute()


def choose_folder(folders, pinned, remarks):
    """Show the menu until a valid number is entered; None if input closes."""
    while True:
        print_folder_list(folders, pinned, remarks)
        try:
            raw = read_choice()
        except EOFError:
            return None
        choice = parse_choice(raw, len(folders))
        if choice is not None:
            return folders[choice - 1]
        clear_screen()
        console.print("[red]Invalid choice, please try again.[/red]")


# ===== Launching =====
def run_command(cmd, cwd):
    # .cmd shims (code, npm on Windows) are only found through PATH lookup
    exe = shutil.which(cmd[0]) or cmd[0]
    subprocess.run([exe, *cmd[1:]], cwd=cwd, check=True)


def detect_project_kind(directory):
    directory = Path(directory)
    if (directory / WEB_MANIFEST).exists():
        return "web"
    if (directory / WEBMAN_MARKER).exists():
        return "webman"
    return None


def server_command(kind):
    if kind == "web":
        return WEB_SERVER_CMD
    if IS_WINDOWS:
        return ["cmd", "/c", "windows.bat"]
    return ["php", "start.php", "start"]


def start_server(directory, kind):
    name = Path(directory).name
    console.print(f"[cyan]Detected {escape(name)} as a {kind} project[/cyan]")
    console.print(f"[cyan]Starting {kind} server in {SERVER_DELAY} seconds, Ctrl+C to stop[/cyan]")
    time.sleep(SERVER_DELAY)
    try:
        run_command(server_command(kind), directory)
    except (OSError, subprocess.CalledProcessError) as e:
        console.print(f"[red]Could not start {kind} server:[/red] {escape(str(e))}")


def launch_project(directory):
    """Open ``directory`` in the editor, then start its dev server if any.

    Editor failures propagate. Server failures are only reported.
    """
    run_command(EDITOR_CMD, directory)
    kind = detect_project_kind(directory)
    if kind:
        start_server(directory, kind)


def run_project_menu(config):
    directory = Path(config.project_dir)
    folders = list_folders(directory, config.pinned)
    if not folders:
        console.print(f"[yellow]No folders found in {escape(str(directory))}[/yellow]")
        return
    while True:
        name = choose_folder(folders, config.pinned, config.remarks)
        if name is None:
            return
        console.print(f"[green]Launching project:[/green] {escape(name)}")
        directory = directory / name
        if name not in config.pinned:
            launch_project(directory)
            return
        # nested levels are listed without pinned ordering
        folders = list_folders(directory)
        if not folders:
            console.print("[yellow]No folders found in this project directory.[/yellow]")
            return
        clear_screen()


# ===== Main Flow =====
def main():
    try:
        config = load_config()
    except (OSError, ValueError) as e:
        console.print(f"[red]Could not read config file:[/red] {escape(str(e))}")
        return
    try:
        run_project_menu(config)
    except (OSError, subprocess.CalledProcessError) as e:
        console.print(f"[red]Launcher error:[/red] {escape(str(e))}")
    except KeyboardInterrupt:
        console.print("\n[blue]Stopped.[/blue]")


# ===== Run Launcher =====
if __name__ == "__main__":
    main()
