from collections import namedtuple

# Every event carries its own time; only the fields a variant needs exist on it.
Timeout = namedtuple("Timeout", ["time", "sequence_number"])
Ack = namedtuple("Ack", ["time", "sequence_number", "error_flag"])
Nil = namedtuple("Nil", ["time"])

# Order of events that share the same time.
TIE_RANK = {Timeout: 0, Ack: 1, Nil: 2}


def describe(event):
    if isinstance(event, Timeout):
        return f"TIMEOUT(sn={event.sequence_number})"
    if isinstance(event, Ack):
        state = "ERR" if event.error_flag else "OK"
        return f"ACK({event.sequence_number}, {state})"
    return "NIL"
