"""階層型エージェント組織のオーケストレーションパッケージ。"""

__version__ = "0.1.0"
