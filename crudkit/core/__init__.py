"""crudkit 共享内核(异常等与框架无关的定义)."""
