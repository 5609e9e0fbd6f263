"""Shared fixtures: a small multi-database dump as written by mysqldump."""

from pathlib import Path

import pytest

PREAMBLE = "/*!40014 SET @OLD_FOREIGN_KEY_CHECKS=@@FOREIGN_KEY_CHECKS, FOREIGN_KEY_CHECKS=0 */;\n"
POSTAMBLE = "/*!40014 SET FOREIGN_KEY_CHECKS=@OLD_FOREIGN_KEY_CHECKS */;\n"

HEADER = """\
-- MySQL dump 10.13  Distrib 5.7.42, for Linux (x86_64)
--
-- Host: localhost    Database:
-- ------------------------------------------------------
-- Server version\t5.7.42

/*!40101 SET @OLD_CHARACTER_SET_CLIENT=@@CHARACTER_SET_CLIENT */;
/*!40014 SET @OLD_UNIQUE_CHECKS=@@UNIQUE_CHECKS, UNIQUE_CHECKS=0 */;

"""

CONFIGDB = """\
--
-- Current Database: `configdb`
--

CREATE DATABASE /*!32312 IF NOT EXISTS*/ `configdb` /*!40100 DEFAULT CHARACTER SET utf8 */;

USE `configdb`;

--
-- Table structure for table `context_server2db_pool`
--

DROP TABLE IF EXISTS `context_server2db_pool`;
/*!40101 SET @saved_cs_client     = @@character_set_client */;
/*!40101 SET character_set_client = utf8 */;
CREATE TABLE `context_server2db_pool` (
  `server_id` int(10) unsigned NOT NULL,
  `cid` int(10) unsigned NOT NULL,
  `read_db_pool_id` int(10) unsigned NOT NULL,
  `write_db_pool_id` int(10) unsigned NOT NULL,
  `db_schema` varchar(32) NOT NULL,
  PRIMARY KEY (`cid`,`server_id`),
  CONSTRAINT `context_server2db_pool_ibfk_1` FOREIGN KEY (`cid`) REFERENCES `context` (`cid`)
) ENGINE=InnoDB DEFAULT CHARSET=utf8;
/*!40101 SET character_set_client = @saved_cs_client */;

--
-- Dumping data for table `context_server2db_pool`
--

LOCK TABLES `context_server2db_pool` WRITE;
/*!40000 ALTER TABLE `context_server2db_pool` DISABLE KEYS */;
INSERT INTO `context_server2db_pool` VALUES (2,1,3,4,'ox_db_3'),(2,5,3,{pool},'ox_db_5');
/*!40000 ALTER TABLE `context_server2db_pool` ENABLE KEYS */;
UNLOCK TABLES;

--
-- Table structure for table `server`
--

DROP TABLE IF EXISTS `server`;
CREATE TABLE `server` (
  `server_id` int(10) unsigned NOT NULL,
  `name` varchar(255) NOT NULL,
  PRIMARY KEY (`server_id`)
) ENGINE=InnoDB DEFAULT CHARSET=utf8;

--
-- Dumping data for table `server`
--

LOCK TABLES `server` WRITE;
/*!40000 ALTER TABLE `server` DISABLE KEYS */;
INSERT INTO `server` VALUES (2,'oxserver'),(5,'other');
/*!40000 ALTER TABLE `server` ENABLE KEYS */;
UNLOCK TABLES;

"""

TENANT_SCHEMA = """\
--
-- Current Database: `ox_db_5`
--

CREATE DATABASE /*!32312 IF NOT EXISTS*/ `ox_db_5` /*!40100 DEFAULT CHARACTER SET utf8 */;

USE `ox_db_5`;

--
-- Table structure for table `prg_contacts`
--

DROP TABLE IF EXISTS `prg_contacts`;
CREATE TABLE `prg_contacts` (
  `cid` int(10) unsigned NOT NULL,
  `intfield01` int(10) unsigned NOT NULL,
  `field01` varchar(320) DEFAULT NULL,
  PRIMARY KEY (`cid`,`intfield01`)
) ENGINE=InnoDB DEFAULT CHARSET=utf8;

--
-- Dumping data for table `prg_contacts`
--

LOCK TABLES `prg_contacts` WRITE;
/*!40000 ALTER TABLE `prg_contacts` DISABLE KEYS */;
INSERT INTO `prg_contacts` VALUES (1,1,'alice'),(5,2,'it\\'s, (me)'),(5,3,NULL);
INSERT INTO `prg_contacts` VALUES (1,4,'bob');
/*!40000 ALTER TABLE `prg_contacts` ENABLE KEYS */;
UNLOCK TABLES;

--
-- Table structure for table `updateTask`
--

DROP TABLE IF EXISTS `updateTask`;
CREATE TABLE `updateTask` (
  `cid` int(10) unsigned NOT NULL,
  `taskName` varchar(1024) NOT NULL,
  `successful` tinyint(1) NOT NULL,
  `lastModified` bigint(20) NOT NULL,
  `uuid` varchar(36) NOT NULL,
  PRIMARY KEY (`cid`,`uuid`)
) ENGINE=InnoDB DEFAULT CHARSET=utf8;

--
-- Dumping data for table `updateTask`
--

LOCK TABLES `updateTask` WRITE;
/*!40000 ALTER TABLE `updateTask` DISABLE KEYS */;
INSERT INTO `updateTask` VALUES (0,'com.openexchange.groupware.update.tasks.FirstTask',1,1690000000000,'u1'),(1,'com.openexchange.Other',1,1690000000001,'u2'),(5,'com.openexchange.Mine',0,1690000000002,'u3');
/*!40000 ALTER TABLE `updateTask` ENABLE KEYS */;
UNLOCK TABLES;

"""

OTHER_SCHEMA = """\
--
-- Current Database: `otherschema`
--

USE `otherschema`;

--
-- Table structure for table `prg_dates`
--

DROP TABLE IF EXISTS `prg_dates`;
CREATE TABLE `prg_dates` (
  `cid` int(10) unsigned NOT NULL,
  `intfield01` int(10) unsigned NOT NULL,
  PRIMARY KEY (`cid`,`intfield01`)
) ENGINE=InnoDB DEFAULT CHARSET=utf8;

--
-- Dumping data for table `prg_dates`
--

LOCK TABLES `prg_dates` WRITE;
/*!40000 ALTER TABLE `prg_dates` DISABLE KEYS */;
INSERT INTO `prg_dates` VALUES (5,99);
/*!40000 ALTER TABLE `prg_dates` ENABLE KEYS */;
UNLOCK TABLES;

-- Dump completed on 2023-07-22 10:00:00
"""


def build_dump(pool: str = "6") -> str:
    return HEADER + CONFIGDB.replace("{pool}", pool) + TENANT_SCHEMA + OTHER_SCHEMA


@pytest.fixture
def dump_file(tmp_path: Path) -> Path:
    path = tmp_path / "dump.sql"
    path.write_text(build_dump(), encoding="utf-8")
    return path


@pytest.fixture
def out_dir(tmp_path: Path) -> Path:
    path = tmp_path / "out"
    path.mkdir()
    return path
