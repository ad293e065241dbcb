"""
SPLPv1 protocol definition

Line-oriented text protocol between a client (A) and a server (B):
- Handshake: CONNECT / CONNECT_OK
- Requests from A: GET_VER, GET_DATA, GET_FILE, GET_COMMAND, GET_B64, DISCONNECT
- Replies from B: "VERSION <digits>", "<CMD> <token> <CMD>", "B64: <base64>"
- Teardown: DISCONNECT / DISCONNECT_OK

Any invalid message resets the session to INIT.
"""

__version__ = "1.0.0"

# Wire literals (case-sensitive ASCII)
CONNECT = "CONNECT"
CONNECT_OK = "CONNECT_OK"
GET_VER = "GET_VER"
GET_DATA = "GET_DATA"
GET_FILE = "GET_FILE"
GET_COMMAND = "GET_COMMAND"
GET_B64 = "GET_B64"
DISCONNECT = "DISCONNECT"
VERSION = "VERSION"
B64 = "B64:"
DISCONNECT_OK = "DISCONNECT_OK"

SEPARATOR = " "

# State model: transitions without "grammar" match message_type exactly
state_model = {
    "initial_state": "INIT",
    "states": [
        "INIT",
        "CONNECTING",
        "CONNECTED",
        "WAITING_VER",
        "WAITING_DATA",
        "WAITING_B64_DATA",
        "DISCONNECTING",
    ],
    "transitions": [
        {
            "from": "INIT",
            "to": "CONNECTING",
            "direction": "A->B",
            "message_type": CONNECT,
        },
        {
            "from": "CONNECTING",
            "to": "CONNECTED",
            "direction": "B->A",
            "message_type": CONNECT_OK,
        },
        # From CONNECTED: one request at a time
        {
            "from": "CONNECTED",
            "to": "WAITING_VER",
            "direction": "A->B",
            "message_type": GET_VER,
        },
        {
            "from": "CONNECTED",
            "to": "WAITING_DATA",
            "direction": "A->B",
            "message_type": GET_DATA,
            "pending": True,
        },
        {
            "from": "CONNECTED",
            "to": "WAITING_DATA",
            "direction": "A->B",
            "message_type": GET_FILE,
            "pending": True,
        },
        {
            "from": "CONNECTED",
            "to": "WAITING_DATA",
            "direction": "A->B",
            "message_type": GET_COMMAND,
            "pending": True,
        },
        {
            "from": "CONNECTED",
            "to": "WAITING_B64_DATA",
            "direction": "A->B",
            "message_type": GET_B64,
        },
        {
            "from": "CONNECTED",
            "to": "DISCONNECTING",
            "direction": "A->B",
            "message_type": DISCONNECT,
        },
        # Replies from B
        {
            "from": "WAITING_VER",
            "to": "CONNECTED",
            "direction": "B->A",
            "message_type": VERSION,
            "grammar": "version",
        },
        {
            "from": "WAITING_DATA",
            "to": "CONNECTED",
            "direction": "B->A",
            "message_type": "DATA_REPLY",
            "grammar": "data",
        },
        {
            "from": "WAITING_B64_DATA",
            "to": "CONNECTED",
            "direction": "B->A",
            "message_type": B64,
            "grammar": "base64",
        },
        {
            "from": "DISCONNECTING",
            "to": "INIT",
            "direction": "B->A",
            "message_type": DISCONNECT_OK,
        },
    ],
}
