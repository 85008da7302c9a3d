"""crudkit 工具函数."""
