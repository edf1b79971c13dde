"""
例外類別

轉換邊界 (SegmentConverter.convert) 一律以 bool 回報失敗，
這裡的例外只在套件內部傳遞，由 converter 捕捉後記錄並轉為 False。
"""


class SegreconError(Exception):
    """segrecon 所有例外的基底類別"""


class EngineUnavailableError(SegreconError):
    """轉換引擎無法使用 (缺少必要操作或初始化失敗)"""


class InvalidStateError(SegreconError):
    """
    前置條件不成立

    例如 RESIZED_SEGMENT 模式呼叫時沒有任何轉換段落。
    拋出前不會修改任何段落。
    """
