"""RPC helper types: resource identifiers, error details and error fields."""