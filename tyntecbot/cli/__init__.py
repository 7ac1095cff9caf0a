"""tyntecbot 的命令行接口。"""
