"""Verb catalogue and the per-verb shape hints the parser relies on.

These tables are configuration, not something derivable from the protocol:
the daemon gives no shape tag, so which verbs must always return a list, and
which group their output under a naming key, is maintained by hand.
"""

# Every verb the client exposes, one MPDClient method each
COMMANDS = (
    "add", "addid", "clear", "clearerror", "close", "commands", "consume",
    "count", "crossfade", "currentsong", "decoders", "delete", "deleteid",
    "disableoutput", "enableoutput", "find", "findadd", "idle", "kill",
    "list", "listall", "listallinfo", "listplaylist", "listplaylistinfo",
    "listplaylists", "load", "lsinfo", "mixrampdb", "mixrampdelay", "move",
    "moveid", "next", "noidle", "notcommands", "outputs", "password",
    "pause", "ping", "play", "playid", "playlist", "playlistadd",
    "playlistclear", "playlistdelete", "playlistfind", "playlistid",
    "playlistinfo", "playlistmove", "playlistsearch", "plchanges",
    "plchangesposid", "previous", "random", "rename", "repeat",
    "replay_gain_mode", "replay_gain_status", "rescan", "rm", "save",
    "search", "seek", "seekid", "setvol", "shuffle", "single", "stats",
    "status", "sticker", "stop", "swap", "swapid", "tagtypes", "update",
    "urlhandlers",
)

# Verbs whose result is always a list, even with zero or one line of output
LIST_COMMANDS = frozenset({
    "commands",
    "find",
    "list",
    "listall",
    "listallinfo",
    "listplaylist",
    "listplaylistinfo",
    "lsinfo",
    "notcommands",
    "outputs",
    "playlist",
    "playlistfind",
    "playlistid",
    "playlistinfo",
    "playlistsearch",
    "plchanges",
    "plchangesposid",
    "search",
    "tagtypes",
    "urlhandlers",
})

# Verbs whose output is a set of named sub-objects, keyed by this field
GROUPED_COMMANDS = {
    "decoders": "plugin",
    "listplaylists": "playlist",
}

# The daemon drops the connection after these instead of answering
UNACKNOWLEDGED_COMMANDS = frozenset({"close", "kill"})
