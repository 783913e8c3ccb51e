"""GUIアプリケーションのエントリーポイント"""

import sys

from gxt_editor.cli import main

if __name__ == "__main__":
    sys.exit(main())
