from __future__ import annotations

import json

from sonar_autobind.file_scanner import list_files_in_folder
from sonar_autobind.protocol import FolderUriParams


def run_list_files(args) -> int:
    if not args.folder_uri:
        raise SystemExit("--folder-uri is required for list-files mode.")
    try:
        params = FolderUriParams.from_dict({"folderUri": args.folder_uri})
        resp = list_files_in_folder(params)
    except ValueError as e:
        raise SystemExit(f"ERROR: {e}")

    print(json.dumps(resp.to_dict(), indent=2, ensure_ascii=False))
    return 0
