"""Lua scripts run atomically on the Redis server."""

DEL_IF_EQUAL_NAME = "delifequal"

# Delete KEYS[1] only while it still holds ARGV[1] (the owner's token).
# returns: 1 if deleted, otherwise 0
DEL_IF_EQUAL = """
if redis.call('get', KEYS[1]) == ARGV[1] then
    return redis.call('del', KEYS[1])
else
    return 0
end
"""
