from .record_store_port import MailRecordStorePort

__all__ = ["MailRecordStorePort"]
