def is_query(command: str) -> bool:
    """Determine whether a command string expects a reply.

    A command is a query when its header (the text before the first space)
    ends with ``?``. Only the literal space separates header from arguments,
    so ``"*IDN?\\n"`` is a query while a tab-separated header such as
    ``"MEAS?\\tCH1"`` is not.
    """
    if not command:
        return False

    return command.split(" ")[0].strip().endswith("?")
