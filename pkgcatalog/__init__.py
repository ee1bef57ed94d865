"""pkgcatalog - 安装包资源的声明、校验与依赖推导"""

__version__ = "0.1.0"
