"""GUIモジュール"""

from gxt_editor.gui.main_window import MainWindow

__all__ = ["MainWindow"]
