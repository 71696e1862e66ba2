# import all models so Base.metadata sees them
from approveflow.db.models.kv import KeyValue
